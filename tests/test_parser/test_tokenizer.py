"""Tests for the markup tokenizer."""

import pytest

from stencil.parser import Tokenizer, TokenKind, UnexpectedEOF


def _tokens(source: str) -> list[tuple[TokenKind, str]]:
    tokenizer = Tokenizer(source)
    tokens = []
    while not tokenizer.is_eof():
        token = tokenizer.next()
        tokens.append((token.kind, token.value))
    return tokens


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class TestClassification:
    def test_self_closing_element(self) -> None:
        assert _tokens("<div a='b' />") == [
            (TokenKind.LESS_THAN, "<"),
            (TokenKind.WORD, "div"),
            (TokenKind.WHITESPACE, " "),
            (TokenKind.WORD, "a"),
            (TokenKind.EQUALS, "="),
            (TokenKind.SINGLE_QUOTE, "'"),
            (TokenKind.WORD, "b"),
            (TokenKind.SINGLE_QUOTE, "'"),
            (TokenKind.WHITESPACE, " "),
            (TokenKind.SELF_CLOSE_TAG, "/>"),
        ]

    def test_close_tag(self) -> None:
        assert _tokens("</div>") == [
            (TokenKind.CLOSE_TAG, "</"),
            (TokenKind.WORD, "div"),
            (TokenKind.GREATER_THAN, ">"),
        ]

    def test_slot(self) -> None:
        assert _tokens("{{x}}") == [
            (TokenKind.SLOT_OPEN, "{{"),
            (TokenKind.WORD, "x"),
            (TokenKind.SLOT_CLOSE, "}}"),
        ]

    def test_double_quote(self) -> None:
        kinds = [kind for kind, _ in _tokens('"a"')]
        assert kinds == [TokenKind.DOUBLE_QUOTE, TokenKind.WORD, TokenKind.DOUBLE_QUOTE]

    def test_dot_splits_words(self) -> None:
        assert _tokens("a.b") == [
            (TokenKind.WORD, "a"),
            (TokenKind.DOT, "."),
            (TokenKind.WORD, "b"),
        ]

    def test_lone_slash_and_braces_are_word_material(self) -> None:
        assert _tokens("a/b{c}") == [(TokenKind.WORD, "a/b{c}")]

    def test_whitespace_run_is_one_token(self) -> None:
        assert _tokens("a \n\t b") == [
            (TokenKind.WORD, "a"),
            (TokenKind.WHITESPACE, " \n\t "),
            (TokenKind.WORD, "b"),
        ]

    def test_token_positions(self) -> None:
        tokenizer = Tokenizer("<ab>")
        assert tokenizer.next().start == 0
        token = tokenizer.next()
        assert token.start == 1
        assert token.end == 3


# ---------------------------------------------------------------------------
# Cursor API
# ---------------------------------------------------------------------------


class TestCursor:
    def test_peek_does_not_consume(self) -> None:
        tokenizer = Tokenizer("<div>")
        assert tokenizer.peek().kind is TokenKind.LESS_THAN
        assert tokenizer.peek().kind is TokenKind.LESS_THAN
        assert tokenizer.pos == 0

    def test_peek_two_ahead(self) -> None:
        tokenizer = Tokenizer("</style>")
        assert tokenizer.peek(2).is_word("style")

    def test_peek_past_end_is_eof(self) -> None:
        tokenizer = Tokenizer("a")
        assert tokenizer.peek(2).kind is TokenKind.EOF
        assert tokenizer.peek(5).kind is TokenKind.EOF

    def test_next_at_end_raises(self) -> None:
        tokenizer = Tokenizer("a")
        tokenizer.next()
        assert tokenizer.is_eof()
        with pytest.raises(UnexpectedEOF):
            tokenizer.next()

    def test_rewind(self) -> None:
        tokenizer = Tokenizer("a b")
        pos = tokenizer.pos
        tokenizer.next()
        tokenizer.next()
        tokenizer.pos = pos
        assert tokenizer.next().value == "a"

    def test_eat_whitespace(self) -> None:
        tokenizer = Tokenizer("   x")
        tokenizer.eat_whitespace()
        assert tokenizer.pos == 3
        tokenizer.eat_whitespace()
        assert tokenizer.pos == 3

    def test_capture_stops_at_end(self) -> None:
        tokenizer = Tokenizer("abc def")
        assert tokenizer.capture(lambda t: True) == "abc def"
        assert tokenizer.is_eof()


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


class TestDiagnostics:
    def test_byte_offset_counts_utf8_bytes(self) -> None:
        tokenizer = Tokenizer("é<")
        assert tokenizer.byte_offset(1) == 2

    def test_location(self) -> None:
        tokenizer = Tokenizer("ab\ncd")
        assert tokenizer.location(0) == (1, 1)
        assert tokenizer.location(4) == (2, 2)
