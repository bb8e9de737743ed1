"""Evaluator error type."""


class EvalError(Exception):
    """Raised when a CSS syntax tree cannot be evaluated.

    Carries a message only; evaluation has no source positions to report.
    """
