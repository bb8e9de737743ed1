"""Run lint rules over a parsed component and collect their findings."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable

from stencil.model.diagnostic import Diagnostic, Severity
from stencil.model.markup import Node
from stencil.validation.rules import ALL_RULES, STRICT_RULES

RuleFunc = Callable[[Node], list[Diagnostic]]


class ValidationError(Exception):
    """A component has ERROR findings; ``diagnostics`` holds only those."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        detail = "; ".join(str(d) for d in diagnostics)
        super().__init__(f"Validation failed with {len(diagnostics)} error(s): {detail}")


def _escalate(diagnostic: Diagnostic) -> Diagnostic:
    if diagnostic.rule in STRICT_RULES and diagnostic.is_warning:
        return replace(diagnostic, severity=Severity.ERROR)
    return diagnostic


def validate(
    node: Node,
    extra_rules: list[RuleFunc] | None = None,
    strict: bool = False,
    ignore: Iterable[str] = (),
) -> list[Diagnostic]:
    """Return every finding for *node*, in rule order.

    Rules named in *ignore* are skipped. With *strict*, warnings from the
    rules in ``STRICT_RULES`` are reported as errors.
    """
    skipped = set(ignore)
    diagnostics: list[Diagnostic] = []
    for rule in [*ALL_RULES, *(extra_rules or [])]:
        if rule.__name__ in skipped:
            continue
        diagnostics.extend(rule(node))
    if strict:
        diagnostics = [_escalate(d) for d in diagnostics]
    return diagnostics


def validate_or_raise(
    node: Node,
    extra_rules: list[RuleFunc] | None = None,
    strict: bool = False,
    ignore: Iterable[str] = (),
) -> list[Diagnostic]:
    """Like :func:`validate`, but raise :class:`ValidationError` on any ERROR.

    The remaining warnings and info findings are returned.
    """
    diagnostics = validate(node, extra_rules=extra_rules, strict=strict, ignore=ignore)
    errors = [d for d in diagnostics if d.is_error]
    if errors:
        raise ValidationError(errors)
    return diagnostics
