"""Lint findings about a component tree."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class Severity(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    @property
    def rank(self) -> int:
        """Sort rank, most severe first."""
        return _RANK[self]


_RANK = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.INFO: 2}


@dataclass(frozen=True)
class Diagnostic:
    """One finding produced by a lint rule.

    ``path`` is the chain of tag names from the root down to the offending
    node, e.g. ``("div", "span")``; it is empty for top-level findings.
    """

    rule: str
    severity: Severity
    message: str
    path: tuple[str, ...] = ()
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    @property
    def location(self) -> str:
        return " > ".join(self.path)

    def __str__(self) -> str:
        where = f" [{self.location}]" if self.path else ""
        return f"{self.severity.value}{where}: {self.message}"


def by_severity(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Errors first, then warnings, then info; rule order kept within a level."""
    return sorted(diagnostics, key=lambda d: d.severity.rank)


def summarize(diagnostics: Iterable[Diagnostic]) -> Counter[Severity]:
    return Counter(d.severity for d in diagnostics)
