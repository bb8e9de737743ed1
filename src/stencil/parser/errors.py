"""Parser error types."""

from __future__ import annotations


class ParseError(Exception):
    """Raised when component source cannot be parsed.

    ``position`` is a UTF-8 byte offset into the source; ``line`` and
    ``column`` are 1-based.
    """

    def __init__(
        self,
        message: str,
        position: int | None = None,
        line: int | None = None,
        column: int | None = None,
    ):
        self.position = position
        self.line = line
        self.column = column
        super().__init__(message)


class UnexpectedToken(ParseError):
    """The current token does not fit any applicable production."""


class UnexpectedEOF(ParseError):
    """Input ended in the middle of a production."""


class NestingTooDeep(ParseError):
    """Elements are nested deeper than the configured limit."""


class MismatchedCloseTag(ParseError):
    """A closing tag names a different element (strict mode only)."""


class CSSSyntaxError(ParseError):
    """An embedded or standalone stylesheet is malformed."""

    index: int | None = None  # character offset into the CSS text
    reason: str | None = None  # the message without its location prefix


class DuplicateAttribute(ParseError):
    """An element repeats an attribute name (strict mode only)."""
