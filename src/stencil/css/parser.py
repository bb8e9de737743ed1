"""Lark-based CSS grammar parser: stylesheet text into a CSS syntax tree."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token
from lark.exceptions import LarkError, UnexpectedCharacters, UnexpectedInput, VisitError
from lark.visitors import Transformer_NonRecursive

from stencil.config import DEFAULT_CONFIG, CompilerConfig

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
    KeyframeRule,
    KeyframesRule,
    MediaRule,
    NamespaceRule,
    NotSelector,
    PageRule,
    PseudoElementSelector,
    PseudoParamElementSelector,
    Selector,
    Sheet,
    SiblingSelector,
    StyleRule,
    SupportsRule,
)
from stencil.parser.errors import CSSSyntaxError

__all__ = ["parse_selector", "parse_sheet"]

SHEET_GRAMMAR_PATH = Path(__file__).parent / "sheet.lark"
SELECTOR_GRAMMAR_PATH = Path(__file__).parent / "selector.lark"

_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")

_ATTRIBUTE_RE = re.compile(
    r"""
    ^\[\s*
    (?P<name>[^\s~|^$*=\]]+)        # attribute name
    \s*
    (?:
        (?P<operator>[~|^$*]?=)     # match operator
        \s*
        (?P<value>.*?)              # value, quotes kept
    )?
    \s*\]$
    """,
    re.VERBOSE | re.DOTALL,
)

_PSEUDO_PARAM_RE = re.compile(r"^(?P<sep>::?)(?P<name>[^(]+)\((?P<param>.*)\)$", re.DOTALL)


@lru_cache(maxsize=None)
def _sheet_parser() -> Lark:
    return Lark(SHEET_GRAMMAR_PATH.read_text(), parser="lalr", start="start")


@lru_cache(maxsize=None)
def _selector_parser() -> Lark:
    return Lark(SELECTOR_GRAMMAR_PATH.read_text(), parser="lalr", start="start")


def _clean(raw: str) -> str:
    """Drop comments and surrounding whitespace from a raw prelude."""
    return _COMMENT_RE.sub("", raw).strip()


def _syntax_error(reason: str, text: str, index: int) -> CSSSyntaxError:
    """Build a CSSSyntaxError for *reason*, positioned at *index* in *text*."""
    line = text.count("\n", 0, index) + 1
    column = index - (text.rfind("\n", 0, index) + 1) + 1
    error = CSSSyntaxError(
        f"Invalid CSS at line {line}, column {column}: {reason}",
        position=len(text[:index].encode("utf-8")),
        line=line,
        column=column,
    )
    error.index = index
    error.reason = reason
    return error


def _describe(exc: UnexpectedInput) -> str:
    if isinstance(exc, UnexpectedCharacters):
        return f"unexpected character {exc.char!r}"
    token = getattr(exc, "token", None)
    if token is None or token.type in ("$END", "<EOF>"):
        return "unexpected end of input"
    return f"unexpected {str(token)!r}"


def _lark_error(exc: LarkError, text: str) -> CSSSyntaxError:
    """Translate a Lark parse failure into a positioned CSSSyntaxError."""
    if not isinstance(exc, UnexpectedInput):
        return _syntax_error(str(exc), text, 0)
    index = exc.pos_in_stream
    if index is None or index < 0:
        index = len(text)
    return _syntax_error(_describe(exc), text, index)


def _visit_error(exc: VisitError, text: str) -> CSSSyntaxError:
    """Unwrap a failure raised while transforming a parse tree."""
    if isinstance(exc.orig_exc, CSSSyntaxError):
        return exc.orig_exc
    error = _syntax_error(f"cannot build tree: {exc.orig_exc}", text, 0)
    error.__cause__ = exc.orig_exc
    return error


def _check_nesting(text: str, limit: int, brackets: str = "()", what: str = "selector") -> None:
    """Reject *text* whose *brackets* nest deeper than *limit*.

    Quoted strings and comments are skipped. Runs before parsing so that
    pathological input such as ``:not(:not(...))`` fails with a positioned
    error rather than deep recursion further down.
    """
    opening, closing = brackets
    depth = 0
    index = 0
    while index < len(text):
        char = text[index]
        if char in "\"'":
            end = text.find(char, index + 1)
            index = len(text) if end < 0 else end + 1
            continue
        if text.startswith("/*", index):
            end = text.find("*/", index + 2)
            index = len(text) if end < 0 else end + 2
            continue
        if char == opening:
            depth += 1
            if depth > limit:
                raise _syntax_error(f"{what} nested deeper than {limit} levels", text, index)
        elif char == closing:
            depth -= 1
        index += 1


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------


class SelectorTransformer(Transformer_NonRecursive):  # type: ignore[type-arg]
    """Transform a selector parse tree into Selector dataclasses."""

    def start(self, items: list[Selector]) -> Selector:
        return items[0]

    def selector_list(self, items: list[Selector]) -> Selector:
        if len(items) == 1:
            return items[0]
        return GroupSelector(list(items))

    def compound(self, items: list[Selector]) -> Selector:
        if len(items) == 1:
            return items[0]
        return ComboSelector(list(items))

    # ---- combinators ----

    def descendant(self, items: list[Selector]) -> Selector:
        return DescendantSelector(parent=items[0], descendant=items[1])

    def child(self, items: list[Selector]) -> Selector:
        return ChildSelector(parent=items[0], child=items[1])

    def adjacent(self, items: list[Selector]) -> Selector:
        return AdjacentSelector(left=items[0], right=items[1])

    def sibling(self, items: list[Selector]) -> Selector:
        return SiblingSelector(left=items[0], right=items[1])

    # ---- simple selectors ----

    def universal(self, items: list[Token]) -> Selector:
        return AllSelector()

    def type_selector(self, items: list[Token]) -> Selector:
        return ElementSelector(tag_name=str(items[0]))

    def class_selector(self, items: list[Token]) -> Selector:
        return ClassSelector(class_name=str(items[0])[1:])

    def id_selector(self, items: list[Token]) -> Selector:
        return IdSelector(id=str(items[0])[1:])

    def attribute_selector(self, items: list[Token]) -> Selector:
        match = _ATTRIBUTE_RE.match(str(items[0]))
        if not match:
            raise CSSSyntaxError(f"Invalid attribute selector: {str(items[0])!r}")
        return AttributeSelector(
            name=match.group("name"),
            operator=match.group("operator"),
            value=match.group("value"),
        )

    def pseudo(self, items: list[Token]) -> Selector:
        raw = str(items[0])
        separator = "::" if raw.startswith("::") else ":"
        return PseudoElementSelector(name=raw[len(separator):], separator=separator)

    def pseudo_param(self, items: list[Token]) -> Selector:
        match = _PSEUDO_PARAM_RE.match(str(items[0]))
        assert match is not None  # the terminal guarantees the shape
        return PseudoParamElementSelector(
            name=match.group("name"),
            param=match.group("param").strip(),
            separator=match.group("sep"),
        )

    def negation(self, items: list[Selector]) -> Selector:
        return NotSelector(selector=items[0])


def parse_selector(source: str, config: CompilerConfig | None = None) -> Selector:
    """Parse selector text such as ``div > a, .b:not(.c)``.

    Parentheses may nest at most ``config.max_depth`` levels.
    """
    config = config or DEFAULT_CONFIG
    text = _clean(source)
    _check_nesting(text, config.max_depth)
    try:
        tree = _selector_parser().parse(text)
    except LarkError as exc:
        raise _lark_error(exc, text) from exc
    try:
        return SelectorTransformer().transform(tree)
    except VisitError as exc:
        raise _visit_error(exc, text)


# ---------------------------------------------------------------------------
# Sheets
# ---------------------------------------------------------------------------


class SheetTransformer(Transformer_NonRecursive):  # type: ignore[type-arg]
    """Transform a stylesheet parse tree into Rule dataclasses."""

    def __init__(self, source: str, config: CompilerConfig) -> None:
        super().__init__()
        self._source = source
        self._config = config

    def start(self, items: list[object]) -> Sheet:
        return Sheet(rules=list(items))  # type: ignore[arg-type]

    # ---- declarations ----

    def declaration(self, items: list[Token]) -> Declaration:
        return Declaration(name=str(items[0]), value=str(items[1]).strip())

    def declarations(self, items: list[Declaration | None]) -> list[Declaration]:
        return [d for d in items if d is not None]

    # ---- rules ----

    def charset(self, items: list[Token]) -> CharsetRule:
        return CharsetRule(value=str(items[0]))

    def namespace(self, items: list[Token]) -> NamespaceRule:
        return NamespaceRule(value=_clean(str(items[0])))

    def font_face(self, items: list[list[Declaration]]) -> FontFaceRule:
        return FontFaceRule(declarations=items[0])

    def media(self, items: list[object]) -> MediaRule:
        return MediaRule(condition_text=_clean(str(items[0])), rules=list(items[1:]))  # type: ignore[arg-type]

    def supports(self, items: list[object]) -> SupportsRule:
        return SupportsRule(condition_text=_clean(str(items[0])), rules=list(items[1:]))  # type: ignore[arg-type]

    def document(self, items: list[object]) -> DocumentRule:
        return DocumentRule(
            condition_text=_clean(str(items[1])),
            rules=list(items[2:]),  # type: ignore[arg-type]
            keyword=str(items[0]),
        )

    def page(self, items: list[object]) -> PageRule:
        selector, declarations = items
        return PageRule(
            selector_text=_clean(str(selector)) if selector is not None else "",
            declarations=declarations,  # type: ignore[arg-type]
        )

    def keyframe(self, items: list[object]) -> KeyframeRule:
        return KeyframeRule(key=_clean(str(items[0])), declarations=items[1])  # type: ignore[arg-type]

    def keyframes(self, items: list[object]) -> KeyframesRule:
        return KeyframesRule(
            name=_clean(str(items[1])),
            rules=list(items[2:]),  # type: ignore[arg-type]
            keyword=str(items[0]),
        )

    def style_rule(self, items: list[object]) -> StyleRule:
        prelude = items[0]
        assert isinstance(prelude, Token)
        try:
            selector = parse_selector(str(prelude), self._config)
        except CSSSyntaxError as exc:
            # Re-anchor the error at the rule's position in the sheet.
            index = (prelude.start_pos or 0) + (exc.index or 0)
            raise _syntax_error(exc.reason or str(exc), self._source, index) from exc
        return StyleRule(selector=selector, declarations=items[1])  # type: ignore[arg-type]


def parse_sheet(source: str, config: CompilerConfig | None = None) -> Sheet:
    """Parse stylesheet text into a Sheet.

    Raises CSSSyntaxError (a ParseError) carrying the location of the first
    problem; no partial sheet is returned.
    """
    config = config or DEFAULT_CONFIG
    # A style rule body is one block deeper than the at-rules around it.
    _check_nesting(source, config.max_depth + 1, "{}", "blocks")
    try:
        tree = _sheet_parser().parse(source)
    except LarkError as exc:
        raise _lark_error(exc, source) from exc
    try:
        return SheetTransformer(source, config).transform(tree)
    except VisitError as exc:
        raise _visit_error(exc, source)
