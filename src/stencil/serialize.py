"""Render markup trees and virtual trees back to source text."""

from __future__ import annotations

from stencil.css.stringify import stringify_sheet, stringify_virtual_sheet
from stencil.model.markup import Attribute, Element, Fragment, Node, Slot, StyleElement, Text
from stencil.model.virt import (
    VirtualElement,
    VirtualFragment,
    VirtualNode,
    VirtualSlot,
    VirtualStyleElement,
    VirtualText,
)

__all__ = ["stringify_attributes", "stringify_node", "stringify_virtual_node"]


def _stringify_attribute(attr: Attribute) -> str:
    if attr.value is None:
        return attr.name
    quote = "'" if '"' in attr.value else '"'
    return f"{attr.name}={quote}{attr.value}{quote}"


def stringify_attributes(attributes: list[Attribute]) -> str:
    """Render attributes with a leading space, or nothing when there are none."""
    return "".join(f" {_stringify_attribute(a)}" for a in attributes)


def stringify_node(node: Node) -> str:
    """Render a parsed markup tree as source text.

    Elements always get an explicit close tag; the source form of empty
    elements (``<a />`` versus ``<a></a>``) is not kept in the tree.
    """
    if isinstance(node, Text):
        return node.value
    if isinstance(node, Slot):
        return f"{{{{{node.script}}}}}"
    if isinstance(node, StyleElement):
        return f"<style{stringify_attributes(node.attributes)}>{stringify_sheet(node.sheet)}</style>"
    if isinstance(node, Element):
        children = "".join(stringify_node(child) for child in node.children)
        return (
            f"<{node.tag_name}{stringify_attributes(node.attributes)}>"
            f"{children}</{node.tag_name}>"
        )
    if isinstance(node, Fragment):
        return "".join(stringify_node(child) for child in node.children)
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def stringify_virtual_node(node: VirtualNode) -> str:
    """Render a compiled virtual tree as HTML-like text."""
    if isinstance(node, VirtualText):
        return node.value
    if isinstance(node, VirtualSlot):
        return f"{{{{{node.script}}}}}"
    if isinstance(node, VirtualStyleElement):
        return (
            f"<style{stringify_attributes(node.attributes)}>"
            f"{stringify_virtual_sheet(node.sheet)}</style>"
        )
    if isinstance(node, VirtualElement):
        children = "".join(stringify_virtual_node(child) for child in node.children)
        return (
            f"<{node.tag_name}{stringify_attributes(node.attributes)}>"
            f"{children}</{node.tag_name}>"
        )
    if isinstance(node, VirtualFragment):
        return "".join(stringify_virtual_node(child) for child in node.children)
    raise TypeError(f"Unknown node type: {type(node).__name__}")
