from stencil.css.errors import EvalError
from stencil.css.evaluator import evaluate, scope_selector
from stencil.css.parser import parse_selector, parse_sheet
from stencil.css.stringify import stringify_selector, stringify_sheet, stringify_virtual_sheet

__all__ = [
    "EvalError",
    "evaluate",
    "parse_selector",
    "parse_sheet",
    "scope_selector",
    "stringify_selector",
    "stringify_sheet",
    "stringify_virtual_sheet",
]
