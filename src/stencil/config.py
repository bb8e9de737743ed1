from __future__ import annotations

from dataclasses import dataclass

# Highest max_depth the recursive markup parser and evaluator can honour
# within Python's default recursion limit.
MAX_DEPTH_LIMIT = 256


@dataclass(frozen=True)
class CompilerConfig:
    scope_prefix: str = "data-pc-"
    max_depth: int = MAX_DEPTH_LIMIT
    strict: bool = False  # reject mismatched close tags and duplicate attributes

    def __post_init__(self) -> None:
        if not 1 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {self.max_depth}"
            )

    def scope_attribute(self, scope: str) -> str:
        """Return the marker attribute name for *scope*, e.g. ``data-pc-x7``."""
        return f"{self.scope_prefix}{scope}"


DEFAULT_CONFIG = CompilerConfig()
