"""Tests for CSS rendering."""

import pytest

from stencil.css import (
    evaluate,
    parse_selector,
    parse_sheet,
    stringify_selector,
    stringify_sheet,
    stringify_virtual_sheet,
)


class TestStringifySelector:
    @pytest.mark.parametrize(
        "source",
        [
            "*",
            "div",
            ".a",
            "#b",
            "[href^=\"x\"]",
            "a:hover",
            "a::before",
            "li:nth-child(2n)",
            ".a:not(.b)",
            "div a",
            "div > a",
            "h1 + p",
            "h1 ~ p",
            "a, b",
            ":is(:not(.a))",
            "[title=\"a]b\"]",
        ],
    )
    def test_canonical_selector_round_trips(self, source: str) -> None:
        assert stringify_selector(parse_selector(source)) == source

    def test_normalizes_whitespace(self) -> None:
        assert stringify_selector(parse_selector("div>a ,b")) == "div > a, b"

    def test_long_chain(self) -> None:
        source = " ~ ".join(["a"] * 1200)
        assert stringify_selector(parse_selector(source)) == source

    def test_unknown_selector(self) -> None:
        with pytest.raises(TypeError):
            stringify_selector(object())  # type: ignore[arg-type]


class TestStringifySheet:
    def test_style_rule(self) -> None:
        sheet = parse_sheet("div{color:red;margin:0}")
        assert stringify_sheet(sheet) == "div {\n  color: red;\n  margin: 0;\n}\n"

    def test_charset(self) -> None:
        assert stringify_sheet(parse_sheet('@charset "utf-8";')) == '@charset "utf-8";\n'

    def test_media_indents_nested_rules(self) -> None:
        sheet = parse_sheet("@media print { a { color: red; } }")
        assert stringify_sheet(sheet) == "@media print {\n  a {\n    color: red;\n  }\n}\n"

    def test_keyframes(self) -> None:
        sheet = parse_sheet("@keyframes spin { to { opacity: 1; } }")
        assert stringify_sheet(sheet) == "@keyframes spin {\n  to {\n    opacity: 1;\n  }\n}\n"

    def test_page_without_selector(self) -> None:
        assert stringify_sheet(parse_sheet("@page { margin: 0; }")) == "@page {\n  margin: 0;\n}\n"

    def test_reparse_gives_same_sheet(self) -> None:
        source = (
            '@charset "utf-8";\n'
            "@font-face { font-family: Foo; }\n"
            "@media screen { .a > .b { color: red; } }\n"
            "@supports (display: grid) { a { display: grid; } }\n"
            "@page :first { margin: 1in; }\n"
            "@-webkit-keyframes spin { from { opacity: 0; } }\n"
        )
        sheet = parse_sheet(source)
        assert parse_sheet(stringify_sheet(sheet)) == sheet


class TestStringifyVirtualSheet:
    def test_media(self) -> None:
        sheet = evaluate(parse_sheet("@media screen { div { color: red; } }"), "x7")
        assert stringify_virtual_sheet(sheet) == (
            "@media screen {\n  div[data-pc-x7] {\n    color: red;\n  }\n}\n"
        )

    def test_style_rule(self) -> None:
        sheet = evaluate(parse_sheet(".a:not(.b) { margin: 0; }"), "x7")
        assert stringify_virtual_sheet(sheet) == (
            ".a[data-pc-x7]:not(.b[data-pc-x7]) {\n  margin: 0;\n}\n"
        )

    def test_document_keyword(self) -> None:
        sheet = evaluate(parse_sheet("@document url(x) { a { color: red; } }"), "x7")
        assert stringify_virtual_sheet(sheet).startswith("@document url(x) {\n")
