from stencil.parser.errors import (
    CSSSyntaxError,
    DuplicateAttribute,
    MismatchedCloseTag,
    NestingTooDeep,
    ParseError,
    UnexpectedEOF,
    UnexpectedToken,
)
from stencil.parser.markup import parse
from stencil.parser.tokenizer import Token, TokenKind, Tokenizer

__all__ = [
    "CSSSyntaxError",
    "DuplicateAttribute",
    "MismatchedCloseTag",
    "NestingTooDeep",
    "ParseError",
    "Token",
    "TokenKind",
    "Tokenizer",
    "UnexpectedEOF",
    "UnexpectedToken",
    "parse",
]
