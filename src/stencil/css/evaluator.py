"""CSS evaluator: turns a CSS syntax tree into a scope-qualified virtual sheet.

Every style rule selector is rewritten so that each element it matches must
also carry the component's scope marker attribute:

    div > a        ->  div[data-pc-x7] > a[data-pc-x7]
    .a:not(.b)     ->  .a[data-pc-x7]:not(.b[data-pc-x7])
    a, b           ->  a[data-pc-x7], b[data-pc-x7]

Scoping is a per-element predicate, so both sides of every combinator are
scoped, while a compound selector (one element) gets the marker once.

``max_depth`` bounds how deeply ``:not(...)`` and selector groups nest, and
how deeply at-rules nest; flat combinator chains may be any length.
"""

from __future__ import annotations

from dataclasses import dataclass

from stencil.config import DEFAULT_CONFIG, CompilerConfig
from stencil.css.errors import EvalError
from stencil.css.stringify import COMBINATOR_JOINS, stringify_selector
from stencil.model.css import (
    AllSelector,
    AttributeSelector,
    CharsetRule,
    ClassSelector,
    ComboSelector,
    Declaration,
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
    StyleRule,
    SupportsRule,
    unchain,
)
from stencil.model.virt import (
    CSSCharsetRule,
    CSSDocumentRule,
    CSSFontFaceRule,
    CSSKeyframeRule,
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

__all__ = ["evaluate", "scope_selector"]

_SIMPLE = (ClassSelector, IdSelector, ElementSelector, AttributeSelector)
_PSEUDO = (PseudoElementSelector, PseudoParamElementSelector)


@dataclass(frozen=True)
class _Context:
    """Read-only evaluation state threaded through one ``evaluate`` call."""

    scope: str
    suffix: str
    max_depth: int


def _context(scope: str, config: CompilerConfig | None) -> _Context:
    config = config or DEFAULT_CONFIG
    if not scope:
        raise EvalError("Scope token must be a non-empty string")
    return _Context(
        scope=scope,
        suffix=f"[{config.scope_attribute(scope)}]",
        max_depth=config.max_depth,
    )


# ---------------------------------------------------------------------------
# Selector scoping
# ---------------------------------------------------------------------------


def _scope(selector: Selector, context: _Context, depth: int) -> str:
    if depth > context.max_depth:
        raise EvalError(f"Selector nesting exceeds {context.max_depth} levels")

    if isinstance(selector, AllSelector):
        return context.suffix

    if isinstance(selector, _SIMPLE):
        return stringify_selector(selector) + context.suffix

    # The pseudo attaches to the scoped host element.
    if isinstance(selector, _PSEUDO):
        return context.suffix + stringify_selector(selector)

    if isinstance(selector, NotSelector):
        return f"{context.suffix}:not({_scope(selector.selector, context, depth + 1)})"

    if type(selector) in COMBINATOR_JOINS:
        return _scope_chain(selector, context, depth)

    if isinstance(selector, GroupSelector):
        if not selector.selectors:
            raise EvalError("Empty selector group")
        return ", ".join(_scope(s, context, depth + 1) for s in selector.selectors)

    if isinstance(selector, ComboSelector):
        return _scope_compound(selector, context, depth)

    raise EvalError(f"Unsupported selector: {type(selector).__name__}")


def _scope_chain(selector: Selector, context: _Context, depth: int) -> str:
    """Scope every element of a combinator chain such as ``a > b c``.

    Chain length does not count toward ``max_depth``; only a chain nested on
    the right-hand side (never produced by the parser) goes one level deeper.
    """
    head, links = unchain(selector)
    parts = [_scope(head, context, depth)]
    for link, right in links:
        nested = type(right) in COMBINATOR_JOINS
        parts.append(COMBINATOR_JOINS[type(link)])
        parts.append(_scope(right, context, depth + 1 if nested else depth))
    return "".join(parts)


def _scope_compound(selector: ComboSelector, context: _Context, depth: int) -> str:
    """Scope a compound selector: one element, so one scope marker.

    The marker is placed in front of the first pseudo or negation member, or
    at the end when there is none.
    """
    if not selector.selectors:
        raise EvalError("Empty compound selector")
    head: list[str] = []
    tail: list[str] = []
    for member in selector.selectors:
        if isinstance(member, NotSelector):
            tail.append(f":not({_scope(member.selector, context, depth + 1)})")
        elif isinstance(member, _PSEUDO):
            tail.append(stringify_selector(member))
        elif isinstance(member, (AllSelector,) + _SIMPLE):
            if tail:
                tail.append(stringify_selector(member))
            else:
                head.append(stringify_selector(member))
        else:
            # Combinators, groups and nested compounds cannot sit inside a compound.
            raise EvalError(f"Invalid member in compound selector: {type(member).__name__}")
    return "".join(head) + context.suffix + "".join(tail)


def scope_selector(selector: Selector, scope: str, config: CompilerConfig | None = None) -> str:
    """Return the scope-qualified selector text for *selector*."""
    return _scope(selector, _context(scope, config), 0)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def _evaluate_style(declarations: list[Declaration]) -> list[StyleProperty]:
    return [StyleProperty(name=d.name, value=d.value) for d in declarations]


def _evaluate_rules(rules: list[Rule], context: _Context, depth: int) -> list[CSSRule]:
    if depth > context.max_depth:
        raise EvalError(f"Rule nesting exceeds {context.max_depth} levels")
    return [_evaluate_rule(rule, context, depth) for rule in rules]


def _evaluate_rule(rule: Rule, context: _Context, depth: int) -> CSSRule:
    if isinstance(rule, StyleRule):
        return CSSStyleRule(
            selector_text=_scope(rule.selector, context, 0),
            style=_evaluate_style(rule.declarations),
        )
    if isinstance(rule, CharsetRule):
        return CSSCharsetRule(value=rule.value)
    if isinstance(rule, NamespaceRule):
        return CSSNamespaceRule(value=rule.value)
    if isinstance(rule, FontFaceRule):
        return CSSFontFaceRule(style=_evaluate_style(rule.declarations))
    if isinstance(rule, MediaRule):
        return CSSMediaRule(
            condition_text=rule.condition_text,
            rules=_evaluate_rules(rule.rules, context, depth + 1),
        )
    if isinstance(rule, SupportsRule):
        return CSSSupportsRule(
            condition_text=rule.condition_text,
            rules=_evaluate_rules(rule.rules, context, depth + 1),
        )
    if isinstance(rule, DocumentRule):
        return CSSDocumentRule(
            condition_text=rule.condition_text,
            rules=_evaluate_rules(rule.rules, context, depth + 1),
            keyword=rule.keyword,
        )
    if isinstance(rule, PageRule):
        return CSSPageRule(
            selector_text=rule.selector_text,
            style=_evaluate_style(rule.declarations),
        )
    if isinstance(rule, KeyframesRule):
        # Keyframe keys are offsets, not selectors: never scoped.
        return CSSKeyframesRule(
            name=rule.name,
            rules=[
                CSSKeyframeRule(key=frame.key, style=_evaluate_style(frame.declarations))
                for frame in rule.rules
            ],
            keyword=rule.keyword,
        )
    raise EvalError(f"Unsupported rule: {type(rule).__name__}")


def evaluate(sheet: Sheet, scope: str, config: CompilerConfig | None = None) -> CSSSheet:
    """Evaluate *sheet* into a virtual sheet scoped to *scope*.

    Raises EvalError on the first failure; no partial sheet is returned.
    """
    context = _context(scope, config)
    return CSSSheet(rules=_evaluate_rules(sheet.rules, context, 0))
