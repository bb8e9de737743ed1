"""Validation rules for component markup trees.

Each rule is a function taking a parsed Node and returning a list of
Diagnostic objects describing any issues found.
"""

from __future__ import annotations

from typing import Iterator

from stencil.model.diagnostic import Diagnostic, Severity
from stencil.model.markup import Element, Fragment, Node, Slot, StyleElement
from stencil.model.query import get_children, has_attribute


def _elements(
    node: Node, path: tuple[str, ...] = ()
) -> Iterator[tuple[Element | StyleElement, tuple[str, ...]]]:
    """Yield every element with the tag path leading to it, in source order."""
    stack: list[tuple[Node, tuple[str, ...]]] = [(node, path)]
    while stack:
        current, current_path = stack.pop()
        if isinstance(current, (Element, StyleElement)):
            current_path = current_path + (current.tag_name,)
            yield current, current_path
        for child in reversed(get_children(current)):
            stack.append((child, current_path))


def _slots(node: Node) -> Iterator[tuple[Slot, tuple[str, ...]]]:
    stack: list[tuple[Node, tuple[str, ...]]] = [(node, ())]
    while stack:
        current, path = stack.pop()
        if isinstance(current, Slot):
            yield current, path
        if isinstance(current, Element):
            path = path + (current.tag_name,)
        for child in reversed(get_children(current)):
            stack.append((child, path))


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def check_duplicate_attributes(node: Node) -> list[Diagnostic]:
    """Attribute names should be unique per element. WARNING severity."""
    diagnostics: list[Diagnostic] = []
    for element, path in _elements(node):
        seen: set[str] = set()
        reported: set[str] = set()
        for attr in element.attributes:
            if attr.name in seen and attr.name not in reported:
                reported.add(attr.name)
                diagnostics.append(
                    Diagnostic(
                        rule="check_duplicate_attributes",
                        severity=Severity.WARNING,
                        message=f"Attribute '{attr.name}' is set more than once on <{element.tag_name}>.",
                        path=path,
                        fix=f"Remove the repeated '{attr.name}' attribute.",
                    )
                )
            seen.add(attr.name)
    return diagnostics


def check_empty_slots(node: Node) -> list[Diagnostic]:
    """Slots should contain an expression. WARNING severity."""
    diagnostics: list[Diagnostic] = []
    for slot, path in _slots(node):
        if not slot.script.strip():
            diagnostics.append(
                Diagnostic(
                    rule="check_empty_slots",
                    severity=Severity.WARNING,
                    message="Empty slot '{{}}' renders nothing.",
                    path=path,
                    fix="Put an expression inside the slot or remove it.",
                )
            )
    return diagnostics


def check_nested_style_elements(node: Node) -> list[Diagnostic]:
    """Style elements are only collected at the top level. INFO severity."""
    diagnostics: list[Diagnostic] = []
    for element, path in _elements(node):
        if isinstance(element, StyleElement) and len(path) > 1:
            diagnostics.append(
                Diagnostic(
                    rule="check_nested_style_elements",
                    severity=Severity.INFO,
                    message="<style> is nested inside another element; its rules still apply to the whole component.",
                    path=path,
                    fix="Move the <style> element to the top level.",
                )
            )
    return diagnostics


def check_import_src(node: Node) -> list[Diagnostic]:
    """<import> elements must name a source. ERROR severity."""
    diagnostics: list[Diagnostic] = []
    for element, path in _elements(node):
        if isinstance(element, Element) and element.tag_name == "import":
            if not has_attribute("src", element):
                diagnostics.append(
                    Diagnostic(
                        rule="check_import_src",
                        severity=Severity.ERROR,
                        message="<import> is missing its 'src' attribute.",
                        path=path,
                        fix='Add src="..." pointing at the imported component.',
                    )
                )
    return diagnostics


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

ALL_RULES = [
    check_duplicate_attributes,
    check_empty_slots,
    check_nested_style_elements,
    check_import_src,
]

# Rules whose warnings become errors in strict mode.
STRICT_RULES = frozenset({"check_duplicate_attributes"})
