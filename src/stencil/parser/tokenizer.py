"""Tokenizer for component markup.

Splits source text into a flat stream of classified tokens.  Tokens are
scanned lazily from the cursor, so rewinding is just assigning ``pos``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from stencil.parser.errors import UnexpectedEOF, UnexpectedToken

__all__ = ["Token", "TokenKind", "Tokenizer"]


class TokenKind(Enum):
    """Classification of a lexical unit."""

    WORD = "Word"
    WHITESPACE = "Whitespace"
    LESS_THAN = "LessThan"
    GREATER_THAN = "GreaterThan"
    SELF_CLOSE_TAG = "SelfCloseTag"
    CLOSE_TAG = "CloseTag"
    SLOT_OPEN = "SlotOpen"
    SLOT_CLOSE = "SlotClose"
    SINGLE_QUOTE = "SingleQuote"
    DOUBLE_QUOTE = "DoubleQuote"
    EQUALS = "Equals"
    DOT = "Dot"
    EOF = "EOF"


# Longest punctuation first so "</" wins over "<".
_PUNCTUATION: tuple[tuple[str, TokenKind], ...] = (
    ("</", TokenKind.CLOSE_TAG),
    ("/>", TokenKind.SELF_CLOSE_TAG),
    ("{{", TokenKind.SLOT_OPEN),
    ("}}", TokenKind.SLOT_CLOSE),
    ("<", TokenKind.LESS_THAN),
    (">", TokenKind.GREATER_THAN),
    ("'", TokenKind.SINGLE_QUOTE),
    ('"', TokenKind.DOUBLE_QUOTE),
    ("=", TokenKind.EQUALS),
    (".", TokenKind.DOT),
)

_WHITESPACE_RE = re.compile(r"\s+")

# Anything that is not whitespace and does not begin a punctuation token.
_WORD_RE = re.compile(r"(?:[^\s<>'\"=./{}]|/(?!>)|\{(?!\{)|\}(?!\}))+")


@dataclass(frozen=True)
class Token:
    """A classified slice of the source starting at character index ``start``."""

    kind: TokenKind
    value: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.value)

    def is_word(self, value: str) -> bool:
        return self.kind is TokenKind.WORD and self.value == value


class Tokenizer:
    """Cursor over a source string producing tokens on demand."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0

    # ---- scanning ----

    def _scan(self, index: int) -> Token:
        source = self.source
        if index >= len(source):
            return Token(TokenKind.EOF, "", len(source))
        for text, kind in _PUNCTUATION:
            if source.startswith(text, index):
                return Token(kind, text, index)
        match = _WHITESPACE_RE.match(source, index)
        if match:
            return Token(TokenKind.WHITESPACE, match.group(), index)
        match = _WORD_RE.match(source, index)
        # Every character is either whitespace, punctuation, or word material.
        assert match is not None
        return Token(TokenKind.WORD, match.group(), index)

    # ---- cursor API ----

    def is_eof(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self, n: int = 1) -> Token:
        """Return the n-th upcoming token without consuming anything.

        Past the end of input this is an EOF token.
        """
        index = self.pos
        token = self._scan(index)
        for _ in range(n - 1):
            if token.kind is TokenKind.EOF:
                break
            token = self._scan(token.end)
        return token

    def next(self) -> Token:
        """Consume and return the next token; raise UnexpectedEOF at the end."""
        token = self._scan(self.pos)
        if token.kind is TokenKind.EOF:
            raise self.unexpected_eof()
        self.pos = token.end
        return token

    def expect(self, kind: TokenKind) -> Token:
        """Consume the next token, which must be of *kind*."""
        token = self.next()
        if token.kind is not kind:
            raise self.unexpected_token(token)
        return token

    def eat_whitespace(self) -> None:
        while self.peek().kind is TokenKind.WHITESPACE:
            self.next()

    def capture(self, keep_going: Callable[[Tokenizer], bool]) -> str:
        """Consume tokens while *keep_going* holds and return the raw slice.

        Stops quietly at end of input; the caller decides whether that is an
        error.
        """
        start = self.pos
        while not self.is_eof() and keep_going(self):
            self.next()
        return self.source[start : self.pos]

    # ---- diagnostics ----

    def byte_offset(self, index: int) -> int:
        """Convert a character index into a UTF-8 byte offset."""
        return len(self.source[:index].encode("utf-8"))

    def location(self, index: int) -> tuple[int, int]:
        """Return the 1-based (line, column) of a character index."""
        line = self.source.count("\n", 0, index) + 1
        column = index - (self.source.rfind("\n", 0, index) + 1) + 1
        return line, column

    def unexpected_token(self, token: Token) -> UnexpectedToken:
        line, column = self.location(token.start)
        return UnexpectedToken(
            f"Unexpected token {token.kind.value} {token.value!r} "
            f"at line {line}, column {column}",
            position=self.byte_offset(token.start),
            line=line,
            column=column,
        )

    def unexpected_eof(self) -> UnexpectedEOF:
        line, column = self.location(len(self.source))
        return UnexpectedEOF(
            "Unexpected end of input",
            position=self.byte_offset(len(self.source)),
            line=line,
            column=column,
        )
