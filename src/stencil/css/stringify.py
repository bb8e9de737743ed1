"""Render CSS syntax trees and virtual sheets back to CSS text."""

from __future__ import annotations

from typing import Iterable, Sequence

from stencil.model.css import (
    AdjacentSelector,
    AllSelector,
    AttributeSelector,
    CharsetRule,
    ChildSelector,
    ClassSelector,
    ComboSelector,
    Declaration,
    DescendantSelector,
    DocumentRule,
    ElementSelector,
    FontFaceRule,
    GroupSelector,
    IdSelector,
    KeyframesRule,
    MediaRule,
    NamespaceRule,
    NotSelector,
    PageRule,
    PseudoElementSelector,
    PseudoParamElementSelector,
    Rule,
    Selector,
    Sheet,
    SiblingSelector,
    StyleRule,
    SupportsRule,
    unchain,
)
from stencil.model.virt import (
    CSSCharsetRule,
    CSSDocumentRule,
    CSSFontFaceRule,
    CSSKeyframesRule,
    CSSMediaRule,
    CSSNamespaceRule,
    CSSPageRule,
    CSSRule,
    CSSSheet,
    CSSStyleRule,
    CSSSupportsRule,
    StyleProperty,
)

__all__ = ["stringify_selector", "stringify_sheet", "stringify_virtual_sheet"]

INDENT = "  "

# Combinator type -> the text joining its two sides.
COMBINATOR_JOINS: dict[type[Selector], str] = {
    DescendantSelector: " ",
    ChildSelector: " > ",
    AdjacentSelector: " + ",
    SiblingSelector: " ~ ",
}


def stringify_selector(selector: Selector) -> str:
    """Render a selector tree as CSS text, without any scoping."""
    if isinstance(selector, AllSelector):
        return "*"
    if isinstance(selector, ElementSelector):
        return selector.tag_name
    if isinstance(selector, ClassSelector):
        return f".{selector.class_name}"
    if isinstance(selector, IdSelector):
        return f"#{selector.id}"
    if isinstance(selector, AttributeSelector):
        if selector.operator is None:
            return f"[{selector.name}]"
        return f"[{selector.name}{selector.operator}{selector.value}]"
    if isinstance(selector, PseudoElementSelector):
        return f"{selector.separator}{selector.name}"
    if isinstance(selector, PseudoParamElementSelector):
        return f"{selector.separator}{selector.name}({selector.param})"
    if isinstance(selector, NotSelector):
        return f":not({stringify_selector(selector.selector)})"
    if type(selector) in COMBINATOR_JOINS:
        head, links = unchain(selector)
        parts = [stringify_selector(head)]
        for link, right in links:
            parts += (COMBINATOR_JOINS[type(link)], stringify_selector(right))
        return "".join(parts)
    if isinstance(selector, GroupSelector):
        return ", ".join(stringify_selector(s) for s in selector.selectors)
    if isinstance(selector, ComboSelector):
        return "".join(stringify_selector(s) for s in selector.selectors)
    raise TypeError(f"Unknown selector type: {type(selector).__name__}")


def _block(head: str, body: Iterable[str], indent: str) -> str:
    inner = "".join(body)
    return f"{indent}{head} {{\n{inner}{indent}}}\n"


def _properties(pairs: Sequence[Declaration] | Sequence[StyleProperty], indent: str) -> list[str]:
    return [f"{indent}{INDENT}{p.name}: {p.value};\n" for p in pairs]


# ---------------------------------------------------------------------------
# Syntax tree
# ---------------------------------------------------------------------------


def _stringify_rule(rule: Rule, indent: str) -> str:
    if isinstance(rule, StyleRule):
        return _block(stringify_selector(rule.selector), _properties(rule.declarations, indent), indent)
    if isinstance(rule, CharsetRule):
        return f"{indent}@charset {rule.value};\n"
    if isinstance(rule, NamespaceRule):
        return f"{indent}@namespace {rule.value};\n"
    if isinstance(rule, FontFaceRule):
        return _block("@font-face", _properties(rule.declarations, indent), indent)
    if isinstance(rule, MediaRule):
        return _block(
            f"@media {rule.condition_text}",
            (_stringify_rule(r, indent + INDENT) for r in rule.rules),
            indent,
        )
    if isinstance(rule, SupportsRule):
        return _block(
            f"@supports {rule.condition_text}",
            (_stringify_rule(r, indent + INDENT) for r in rule.rules),
            indent,
        )
    if isinstance(rule, DocumentRule):
        return _block(
            f"{rule.keyword} {rule.condition_text}",
            (_stringify_rule(r, indent + INDENT) for r in rule.rules),
            indent,
        )
    if isinstance(rule, PageRule):
        head = f"@page {rule.selector_text}" if rule.selector_text else "@page"
        return _block(head, _properties(rule.declarations, indent), indent)
    if isinstance(rule, KeyframesRule):
        return _block(
            f"{rule.keyword} {rule.name}",
            (
                _block(frame.key, _properties(frame.declarations, indent + INDENT), indent + INDENT)
                for frame in rule.rules
            ),
            indent,
        )
    raise TypeError(f"Unknown rule type: {type(rule).__name__}")


def stringify_sheet(sheet: Sheet) -> str:
    """Render a parsed stylesheet as CSS text."""
    return "".join(_stringify_rule(rule, "") for rule in sheet.rules)


# ---------------------------------------------------------------------------
# Virtual sheet
# ---------------------------------------------------------------------------


def _stringify_css_rule(rule: CSSRule, indent: str) -> str:
    if isinstance(rule, CSSStyleRule):
        return _block(rule.selector_text, _properties(rule.style, indent), indent)
    if isinstance(rule, CSSCharsetRule):
        return f"{indent}@charset {rule.value};\n"
    if isinstance(rule, CSSNamespaceRule):
        return f"{indent}@namespace {rule.value};\n"
    if isinstance(rule, CSSFontFaceRule):
        return _block("@font-face", _properties(rule.style, indent), indent)
    if isinstance(rule, CSSMediaRule):
        return _block(
            f"@media {rule.condition_text}",
            (_stringify_css_rule(r, indent + INDENT) for r in rule.rules),
            indent,
        )
    if isinstance(rule, CSSSupportsRule):
        return _block(
            f"@supports {rule.condition_text}",
            (_stringify_css_rule(r, indent + INDENT) for r in rule.rules),
            indent,
        )
    if isinstance(rule, CSSDocumentRule):
        return _block(
            f"{rule.keyword} {rule.condition_text}",
            (_stringify_css_rule(r, indent + INDENT) for r in rule.rules),
            indent,
        )
    if isinstance(rule, CSSPageRule):
        head = f"@page {rule.selector_text}" if rule.selector_text else "@page"
        return _block(head, _properties(rule.style, indent), indent)
    if isinstance(rule, CSSKeyframesRule):
        return _block(
            f"{rule.keyword} {rule.name}",
            (
                _block(frame.key, _properties(frame.style, indent + INDENT), indent + INDENT)
                for frame in rule.rules
            ),
            indent,
        )
    raise TypeError(f"Unknown rule type: {type(rule).__name__}")


def stringify_virtual_sheet(sheet: CSSSheet) -> str:
    """Render an evaluated, scope-qualified sheet as CSS text."""
    return "".join(_stringify_css_rule(rule, "") for rule in sheet.rules)
