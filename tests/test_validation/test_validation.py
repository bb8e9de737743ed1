"""Tests for the markup validator and its lint rules."""

from pathlib import Path

import pytest

from stencil.model.diagnostic import Diagnostic, Severity, by_severity, summarize
from stencil.model.markup import Node
from stencil.parser import parse
from stencil.validation import ValidationError, validate, validate_or_raise
from stencil.validation.rules import (
    check_duplicate_attributes,
    check_empty_slots,
    check_import_src,
    check_nested_style_elements,
)

FIXTURES = Path(__file__).parent.parent / "fixtures"


def _load(name: str) -> Node:
    return parse((FIXTURES / name).read_text())


# ---------------------------------------------------------------------------
# Individual rules
# ---------------------------------------------------------------------------


class TestDuplicateAttributes:
    def test_clean(self) -> None:
        assert check_duplicate_attributes(parse("<a b c />")) == []

    def test_reported_once_per_name(self) -> None:
        diags = check_duplicate_attributes(parse("<a b b b />"))
        assert len(diags) == 1
        assert diags[0].severity is Severity.WARNING
        assert "'b'" in diags[0].message

    def test_path(self) -> None:
        diags = check_duplicate_attributes(parse("<div><span x x /></div>"))
        assert diags[0].path == ("div", "span")
        assert diags[0].location == "div > span"


class TestEmptySlots:
    def test_whitespace_slot(self) -> None:
        diags = check_empty_slots(parse("<p>{{  }}</p>"))
        assert len(diags) == 1
        assert diags[0].path == ("p",)

    def test_filled_slot(self) -> None:
        assert check_empty_slots(parse("{{x}}")) == []


class TestNestedStyleElements:
    def test_top_level_style(self) -> None:
        assert check_nested_style_elements(parse("<style /><div />")) == []

    def test_nested_style(self) -> None:
        diags = check_nested_style_elements(parse("<div><style /></div>"))
        assert len(diags) == 1
        assert diags[0].severity is Severity.INFO
        assert diags[0].path == ("div", "style")


class TestImportSrc:
    def test_missing_src(self) -> None:
        diags = check_import_src(parse("<import id='x' />"))
        assert len(diags) == 1
        assert diags[0].is_error

    def test_with_src(self) -> None:
        assert check_import_src(parse("<import src='./x.pc' />")) == []


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class TestValidate:
    def test_button_fixture_is_clean(self) -> None:
        assert validate(_load("button.pc")) == []

    def test_card_fixture_has_info(self) -> None:
        diags = validate(_load("card.pc"))
        assert [d.rule for d in diags] == ["check_nested_style_elements"]

    def test_lint_fixture(self) -> None:
        diags = validate(_load("lint.pc"))
        assert sorted(d.rule for d in diags) == [
            "check_duplicate_attributes",
            "check_empty_slots",
            "check_import_src",
        ]

    def test_strict_escalates_duplicates(self) -> None:
        diags = validate(_load("lint.pc"), strict=True)
        by_rule = {d.rule: d.severity for d in diags}
        assert by_rule["check_duplicate_attributes"] is Severity.ERROR
        assert by_rule["check_empty_slots"] is Severity.WARNING

    def test_extra_rules(self) -> None:
        def no_divs(node: Node) -> list[Diagnostic]:
            return [Diagnostic(rule="no_divs", severity=Severity.WARNING, message="div")]

        diags = validate(parse("<div />"), extra_rules=[no_divs])
        assert [d.rule for d in diags] == ["no_divs"]

    def test_ignore(self) -> None:
        diags = validate(_load("lint.pc"), ignore=["check_empty_slots", "check_import_src"])
        assert [d.rule for d in diags] == ["check_duplicate_attributes"]


class TestValidateOrRaise:
    def test_raises_on_errors(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_or_raise(_load("lint.pc"))
        assert [d.rule for d in exc_info.value.diagnostics] == ["check_import_src"]
        assert "1 error(s)" in str(exc_info.value)

    def test_returns_warnings(self) -> None:
        diags = validate_or_raise(parse("<a b b />"))
        assert len(diags) == 1
        assert diags[0].is_warning


class TestDiagnosticFormatting:
    def test_with_path(self) -> None:
        diag = Diagnostic(rule="r", severity=Severity.ERROR, message="bad", path=("div", "a"))
        assert str(diag) == "ERROR [div > a]: bad"

    def test_without_path(self) -> None:
        diag = Diagnostic(rule="r", severity=Severity.INFO, message="fyi")
        assert str(diag) == "INFO: fyi"

    def test_ordering_and_summary(self) -> None:
        diags = by_severity(validate(_load("lint.pc")))
        assert [d.severity for d in diags] == [Severity.ERROR, Severity.WARNING, Severity.WARNING]
        counts = summarize(diags)
        assert counts[Severity.WARNING] == 2
        assert counts[Severity.INFO] == 0
