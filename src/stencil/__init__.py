"""Stencil: component template parser and scoped CSS compiler."""

__version__ = "0.1.0"

from stencil.config import CompilerConfig  # noqa: E402
from stencil.parser import ParseError, parse  # noqa: E402
from stencil.css import EvalError, evaluate, parse_sheet, scope_selector  # noqa: E402
from stencil.compiler import compile_component  # noqa: E402
from stencil.serialize import stringify_node, stringify_virtual_node  # noqa: E402

__all__ = [
    "CompilerConfig",
    "EvalError",
    "ParseError",
    "compile_component",
    "evaluate",
    "parse",
    "parse_sheet",
    "scope_selector",
    "stringify_node",
    "stringify_virtual_node",
]
