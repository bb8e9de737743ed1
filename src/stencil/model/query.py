"""Read-only helpers for inspecting markup trees."""

from __future__ import annotations

import re
from typing import Iterator

from stencil.model.markup import Attribute, Element, Fragment, Node, StyleElement, Text

__all__ = [
    "get_attribute",
    "get_attribute_value",
    "get_children",
    "get_children_by_tag_name",
    "get_import_ids",
    "get_imports",
    "get_meta_value",
    "get_parts",
    "get_style_elements",
    "get_visible_child_nodes",
    "has_attribute",
    "is_visible_element",
    "walk",
]

# Elements that carry component metadata rather than rendered content.
_INVISIBLE_TAGS_RE = re.compile(r"^(import|logic|meta|style|part)$")


def get_children(node: Node) -> list[Node]:
    if isinstance(node, (Element, Fragment)):
        return node.children
    return []


def walk(node: Node) -> Iterator[Node]:
    """Yield *node* and all of its descendants, depth first, in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(get_children(current)))


def get_attribute(name: str, element: Element | StyleElement) -> Attribute | None:
    """Return the first attribute called *name*."""
    for attr in element.attributes:
        if attr.name == name:
            return attr
    return None


def get_attribute_value(name: str, element: Element | StyleElement) -> str | None:
    attr = get_attribute(name, element)
    return attr.value if attr else None


def has_attribute(name: str, element: Element | StyleElement) -> bool:
    return get_attribute(name, element) is not None


def get_children_by_tag_name(tag_name: str, parent: Node) -> list[Element | StyleElement]:
    return [
        child
        for child in get_children(parent)
        if isinstance(child, (Element, StyleElement)) and child.tag_name == tag_name
    ]


def get_style_elements(node: Node) -> list[StyleElement]:
    """Top-level ``<style>`` elements (or *node* itself if it is one)."""
    if isinstance(node, StyleElement):
        return [node]
    return [child for child in get_children(node) if isinstance(child, StyleElement)]


def get_imports(node: Node) -> list[Element]:
    """Top-level ``<import src=...>`` elements."""
    return [
        child
        for child in get_children_by_tag_name("import", node)
        if isinstance(child, Element) and has_attribute("src", child)
    ]


def get_import_ids(node: Node) -> list[str]:
    ids = []
    for element in get_imports(node):
        value = get_attribute_value("id", element)
        if value:
            ids.append(value)
    return ids


def get_meta_value(name: str, node: Node) -> str | None:
    """Return the ``content`` of the top-level ``<meta name=...>`` element."""
    for meta in get_children_by_tag_name("meta", node):
        if get_attribute_value("name", meta) == name:
            return get_attribute_value("content", meta)
    return None


def is_visible_element(element: Element | StyleElement) -> bool:
    return not _INVISIBLE_TAGS_RE.match(element.tag_name)


def get_visible_child_nodes(node: Node) -> list[Node]:
    visible: list[Node] = []
    for child in get_children(node):
        if isinstance(child, (Text, Fragment)):
            visible.append(child)
        elif isinstance(child, Element) and is_visible_element(child):
            visible.append(child)
    return visible


def get_parts(node: Node) -> list[Element]:
    return [
        child
        for child in get_children(node)
        if isinstance(child, Element) and child.tag_name == "part"
    ]
