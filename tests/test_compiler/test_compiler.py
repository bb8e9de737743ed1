"""Tests for component compilation and virtual tree rendering."""

import logging
from pathlib import Path

import pytest

from stencil import CompilerConfig, EvalError, ParseError, compile_component, stringify_virtual_node
from stencil.compiler import evaluate_node
from stencil.model.markup import Attribute, Element, Text
from stencil.model.virt import (
    CSSMediaRule,
    CSSStyleRule,
    VirtualElement,
    VirtualFragment,
    VirtualSlot,
    VirtualStyleElement,
    VirtualText,
)

FIXTURES = Path(__file__).parent.parent / "fixtures"

MARKER = Attribute("data-pc-x7")


def _compile(name: str, scope: str = "x7"):
    return compile_component((FIXTURES / name).read_text(), scope)


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------


class TestMarkup:
    def test_element_gets_marker(self) -> None:
        node = compile_component("<div a='b' />", "x7")
        assert node == VirtualElement(
            tag_name="div",
            attributes=[Attribute("a", "b"), MARKER],
            children=[],
        )

    def test_every_element_gets_marker(self) -> None:
        node = compile_component("<ul><li>a</li><li>{{b}}</li></ul>", "x7")
        assert isinstance(node, VirtualElement)
        assert node.attributes == [MARKER]
        for child in node.children:
            assert isinstance(child, VirtualElement)
            assert child.attributes == [MARKER]

    def test_text_and_slots_copied(self) -> None:
        node = compile_component("<p>hi {{name}}</p>", "x7")
        assert isinstance(node, VirtualElement)
        assert node.children == [VirtualText("hi "), VirtualSlot("name")]

    def test_fragment(self) -> None:
        node = compile_component("<a /><b />", "x7")
        assert isinstance(node, VirtualFragment)
        assert len(node.children) == 2

    def test_custom_prefix(self) -> None:
        config = CompilerConfig(scope_prefix="data-s-")
        node = compile_component("<a />", "x7", config)
        assert isinstance(node, VirtualElement)
        assert node.attributes == [Attribute("data-s-x7")]

    def test_evaluate_node_on_parsed_tree(self) -> None:
        tree = Element("a", children=[Text("x")])
        assert evaluate_node(tree, "x7") == VirtualElement("a", [MARKER], [VirtualText("x")])


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------


class TestStyles:
    def test_style_element_evaluated(self) -> None:
        node = compile_component("<style>div > a { color: red; }</style>", "x7")
        assert isinstance(node, VirtualStyleElement)
        rule = node.sheet.rules[0]
        assert isinstance(rule, CSSStyleRule)
        assert rule.selector_text == "div[data-pc-x7] > a[data-pc-x7]"

    def test_style_element_has_no_marker(self) -> None:
        node = compile_component("<style media='print'></style>", "x7")
        assert isinstance(node, VirtualStyleElement)
        assert node.attributes == [Attribute("media", "print")]

    def test_button_fixture(self) -> None:
        node = _compile("button.pc")
        assert isinstance(node, VirtualFragment)
        style = node.children[2]
        assert isinstance(style, VirtualStyleElement)
        selectors = [r.selector_text for r in style.sheet.rules if isinstance(r, CSSStyleRule)]
        assert selectors == [
            ".button[data-pc-x7]",
            ".button[data-pc-x7]:hover > .icon[data-pc-x7]",
        ]
        media = style.sheet.rules[2]
        assert isinstance(media, CSSMediaRule)
        assert media.rules[0].selector_text == ".button[data-pc-x7]"  # type: ignore[union-attr]

    def test_card_fixture_nested_style(self) -> None:
        node = _compile("card.pc")
        assert isinstance(node, VirtualElement)
        style = node.children[2]
        assert isinstance(style, VirtualStyleElement)
        assert [r.selector_text for r in style.sheet.rules] == [  # type: ignore[union-attr]
            ".card[data-pc-x7] > .title[data-pc-x7] + p[data-pc-x7]",
            ".card[data-pc-x7] [data-pc-x7]:not(.title[data-pc-x7])",
        ]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_parse_error_propagates(self) -> None:
        with pytest.raises(ParseError):
            compile_component("<div a=", "x7")

    def test_empty_scope(self) -> None:
        with pytest.raises(EvalError):
            compile_component("<div />", "")

    def test_strict_config_applies_to_parse(self) -> None:
        with pytest.raises(ParseError):
            compile_component("<a></b>", "x7", CompilerConfig(strict=True))


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRendering:
    def test_empty_element(self) -> None:
        assert stringify_virtual_node(compile_component("<div />", "x7")) == "<div data-pc-x7></div>"

    def test_attributes_and_children(self) -> None:
        node = compile_component("<a href='/x'>go {{where}}</a>", "x7")
        assert stringify_virtual_node(node) == '<a href="/x" data-pc-x7>go {{where}}</a>'

    def test_style_element(self) -> None:
        node = compile_component("<style>a { color: red; }</style>", "x7")
        assert stringify_virtual_node(node) == (
            "<style>a[data-pc-x7] {\n  color: red;\n}\n</style>"
        )

    def test_unknown_node(self) -> None:
        with pytest.raises(TypeError):
            stringify_virtual_node(object())  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestLogging:
    def test_debug_summary(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="stencil.compiler"):
            _compile("button.pc")
        messages = [r.getMessage() for r in caplog.records if r.name == "stencil.compiler"]
        assert messages == ["Compiled scope=x7 elements=4 style_elements=1 rules=3"]

    def test_silent_at_default_level(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="stencil.compiler"):
            _compile("button.pc")
        assert not [r for r in caplog.records if r.name == "stencil.compiler"]
