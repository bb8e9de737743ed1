"""Compile component source into a scoped virtual tree.

Parses the source, evaluates every ``<style>`` element against the scope
token, and tags every element with the scope marker attribute so the
rewritten selectors match only this component's markup.
"""

from __future__ import annotations

import logging

from stencil.config import DEFAULT_CONFIG, CompilerConfig
from stencil.css.errors import EvalError
from stencil.css.evaluator import evaluate
from stencil.model.markup import Attribute, Element, Fragment, Node, Slot, StyleElement, Text
from stencil.model.virt import (
    VirtualElement,
    VirtualFragment,
    VirtualNode,
    VirtualSlot,
    VirtualStyleElement,
    VirtualText,
)
from stencil.parser.markup import parse

__all__ = ["compile_component", "evaluate_node"]

log = logging.getLogger("stencil.compiler")


class _Stats:
    def __init__(self) -> None:
        self.elements = 0
        self.style_elements = 0
        self.rules = 0


def _evaluate(
    node: Node, scope: str, marker: Attribute, config: CompilerConfig, stats: _Stats
) -> VirtualNode:
    if isinstance(node, Text):
        return VirtualText(value=node.value)
    if isinstance(node, Slot):
        return VirtualSlot(script=node.script)
    if isinstance(node, StyleElement):
        sheet = evaluate(node.sheet, scope, config)
        stats.style_elements += 1
        stats.rules += len(sheet.rules)
        return VirtualStyleElement(attributes=list(node.attributes), sheet=sheet)
    if isinstance(node, Element):
        stats.elements += 1
        return VirtualElement(
            tag_name=node.tag_name,
            attributes=[*node.attributes, marker],
            children=[_evaluate(c, scope, marker, config, stats) for c in node.children],
        )
    if isinstance(node, Fragment):
        return VirtualFragment(
            children=[_evaluate(c, scope, marker, config, stats) for c in node.children]
        )
    raise EvalError(f"Unsupported node: {type(node).__name__}")


def evaluate_node(node: Node, scope: str, config: CompilerConfig | None = None) -> VirtualNode:
    """Evaluate an already parsed tree into a scoped virtual tree."""
    config = config or DEFAULT_CONFIG
    if not scope:
        raise EvalError("Scope token must be a non-empty string")
    stats = _Stats()
    marker = Attribute(name=config.scope_attribute(scope))
    result = _evaluate(node, scope, marker, config, stats)
    log.debug(
        "Compiled scope=%s elements=%d style_elements=%d rules=%d",
        scope,
        stats.elements,
        stats.style_elements,
        stats.rules,
    )
    return result


def compile_component(
    source: str, scope: str, config: CompilerConfig | None = None
) -> VirtualNode:
    """Parse *source* and evaluate it with *scope*.

    ParseError and EvalError propagate unchanged so callers can tell a
    malformed source apart from a failed evaluation.
    """
    config = config or DEFAULT_CONFIG
    tree = parse(source, config)
    return evaluate_node(tree, scope, config)
