"""Recursive-descent parser for component markup.

Grammar:
    fragment      = node*
    node          = slot | element | text
    slot          = '{{' raw '}}'
    element       = '<' name attribute* ( '/>' | '>' node* '</' name '>' )
    style-element = element named 'style' whose body is CSS
    attribute     = name ( '=' quoted-string )?
    quoted-string = "'" raw "'" | '"' raw '"'
    text          = run of tokens up to a slot, element, or close tag

A single top-level node is returned as-is; several are wrapped in a
Fragment.  The parser is fail-fast: the first problem raises a ParseError
and no partial tree is returned.
"""

from __future__ import annotations

from typing import TypeVar

from stencil.config import DEFAULT_CONFIG, CompilerConfig
from stencil.css import parser as css_parser
from stencil.model.css import Sheet
from stencil.model.markup import Attribute, Element, Fragment, Node, Slot, StyleElement, Text
from stencil.parser.errors import (
    CSSSyntaxError,
    DuplicateAttribute,
    MismatchedCloseTag,
    NestingTooDeep,
    ParseError,
)
from stencil.parser.tokenizer import Token, TokenKind, Tokenizer

E = TypeVar("E", bound=ParseError)

__all__ = ["parse"]

# Tokens that end a text run.
_TEXT_STOP = frozenset({TokenKind.SLOT_OPEN, TokenKind.LESS_THAN, TokenKind.CLOSE_TAG})

# Tokens a tag or attribute name is built from.
_NAME_KINDS = frozenset({TokenKind.WORD, TokenKind.DOT})

_QUOTES = frozenset({TokenKind.SINGLE_QUOTE, TokenKind.DOUBLE_QUOTE})


class _MarkupParser:
    def __init__(self, tokenizer: Tokenizer, config: CompilerConfig) -> None:
        self.tokenizer = tokenizer
        self.config = config
        self.depth = 0

    # ---- top level ----

    def parse_fragment(self) -> Node:
        tokenizer = self.tokenizer
        children: list[Node] = []
        tokenizer.eat_whitespace()
        while not tokenizer.is_eof():
            children.append(self.parse_node())
            tokenizer.eat_whitespace()
        if len(children) == 1:
            return children[0]
        return Fragment(children=children)

    def parse_node(self) -> Node:
        tokenizer = self.tokenizer
        tokenizer.eat_whitespace()
        pos = tokenizer.pos
        token = tokenizer.next()
        if token.kind is TokenKind.SLOT_OPEN:
            return self.parse_slot()
        if token.kind is TokenKind.LESS_THAN:
            return self.parse_element(token)
        if token.kind is TokenKind.CLOSE_TAG:
            raise tokenizer.unexpected_token(token)

        # Not a token-led production: rewind and read a text run.
        tokenizer.pos = pos
        value = tokenizer.capture(lambda t: t.peek().kind not in _TEXT_STOP)
        return Text(value=value)

    # ---- slots ----

    def parse_slot(self) -> Slot:
        tokenizer = self.tokenizer
        script = tokenizer.capture(lambda t: t.peek().kind is not TokenKind.SLOT_CLOSE)
        tokenizer.expect(TokenKind.SLOT_CLOSE)
        return Slot(script=script)

    # ---- elements ----

    def parse_element(self, open_token: Token) -> Element | StyleElement:
        if self.depth >= self.config.max_depth:
            raise self._error(
                NestingTooDeep,
                f"Elements nested deeper than {self.config.max_depth} levels",
                open_token.start,
            )
        tag_name = self.parse_name()
        attributes = self.parse_attributes()
        if tag_name == "style":
            return self.parse_style_element(attributes)

        # One nesting level is two stack frames: parse_node and parse_element.
        tokenizer = self.tokenizer
        token = tokenizer.next()
        if token.kind is TokenKind.SELF_CLOSE_TAG:
            return Element(tag_name=tag_name, attributes=attributes)
        if token.kind is not TokenKind.GREATER_THAN:
            raise tokenizer.unexpected_token(token)

        self.depth += 1
        children: list[Node] = []
        tokenizer.eat_whitespace()
        while True:
            kind = tokenizer.peek().kind
            if kind is TokenKind.CLOSE_TAG:
                break
            if kind is TokenKind.EOF:
                raise tokenizer.unexpected_eof()
            children.append(self.parse_node())
            tokenizer.eat_whitespace()
        self.depth -= 1

        self.parse_close_tag(tag_name)
        return Element(tag_name=tag_name, attributes=attributes, children=children)

    def parse_close_tag(self, tag_name: str) -> None:
        tokenizer = self.tokenizer
        tokenizer.expect(TokenKind.CLOSE_TAG)
        start = tokenizer.pos
        close_name = self.parse_name()
        tokenizer.eat_whitespace()
        tokenizer.expect(TokenKind.GREATER_THAN)
        if self.config.strict and close_name != tag_name:
            raise self._error(
                MismatchedCloseTag,
                f"Closing tag </{close_name}> does not match <{tag_name}>",
                start,
            )

    def parse_style_element(self, attributes: list[Attribute]) -> StyleElement:
        tokenizer = self.tokenizer
        token = tokenizer.next()
        if token.kind is TokenKind.SELF_CLOSE_TAG:
            return StyleElement(attributes=attributes, sheet=Sheet())
        if token.kind is not TokenKind.GREATER_THAN:
            raise tokenizer.unexpected_token(token)

        # Not CSS-aware: a "</style" inside a CSS string ends the body early.
        body_start = tokenizer.pos
        body = tokenizer.capture(
            lambda t: not (t.peek().kind is TokenKind.CLOSE_TAG and t.peek(2).is_word("style"))
        )
        self.parse_close_tag("style")

        try:
            sheet = css_parser.parse_sheet(body, self.config)
        except CSSSyntaxError as exc:
            index = body_start + (exc.index or 0)
            line, column = self.tokenizer.location(index)
            reason = exc.reason or str(exc)
            error = self._error(
                CSSSyntaxError,
                f"Invalid <style> body at line {line}, column {column}: {reason}",
                index,
            )
            error.index = index
            error.reason = reason
            raise error from exc
        return StyleElement(attributes=attributes, sheet=sheet)

    # ---- names and attributes ----

    def parse_name(self) -> str:
        tokenizer = self.tokenizer
        token = tokenizer.peek()
        if token.kind is TokenKind.EOF:
            raise tokenizer.unexpected_eof()
        name = tokenizer.capture(lambda t: t.peek().kind in _NAME_KINDS)
        if not name:
            raise tokenizer.unexpected_token(token)
        return name

    def parse_attributes(self) -> list[Attribute]:
        tokenizer = self.tokenizer
        attributes: list[Attribute] = []
        seen: set[str] = set()
        while True:
            tokenizer.eat_whitespace()
            token = tokenizer.peek()
            if token.kind in (TokenKind.SELF_CLOSE_TAG, TokenKind.GREATER_THAN):
                break
            attribute = self.parse_attribute()
            if self.config.strict and attribute.name in seen:
                raise self._error(
                    DuplicateAttribute,
                    f"Duplicate attribute {attribute.name!r}",
                    token.start,
                )
            seen.add(attribute.name)
            attributes.append(attribute)
        return attributes

    def parse_attribute(self) -> Attribute:
        tokenizer = self.tokenizer
        name = self.parse_name()
        value = None
        if tokenizer.peek().kind is TokenKind.EQUALS:
            tokenizer.next()
            value = self.parse_string()
        return Attribute(name=name, value=value)

    def parse_string(self) -> str:
        tokenizer = self.tokenizer
        quote = tokenizer.next()
        if quote.kind not in _QUOTES:
            raise tokenizer.unexpected_token(quote)
        value = tokenizer.capture(lambda t: t.peek().kind is not quote.kind)
        tokenizer.expect(quote.kind)
        return value

    # ---- errors ----

    def _error(self, error_type: type[E], message: str, index: int) -> E:
        line, column = self.tokenizer.location(index)
        return error_type(
            message,
            position=self.tokenizer.byte_offset(index),
            line=line,
            column=column,
        )


def parse(source: str, config: CompilerConfig | None = None) -> Node:
    """Parse component source into a markup tree.

    Raises a ParseError subclass (UnexpectedToken, UnexpectedEOF, ...) on the
    first problem.
    """
    return _MarkupParser(Tokenizer(source), config or DEFAULT_CONFIG).parse_fragment()
