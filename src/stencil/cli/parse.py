"""CLI command: stencil parse -- display the markup tree structure."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stencil.config import CompilerConfig
from stencil.css.stringify import stringify_selector
from stencil.model.css import StyleRule
from stencil.model.markup import Element, Fragment, Node, Slot, StyleElement, Text
from stencil.parser import ParseError, parse
from stencil.serialize import stringify_attributes


def _preview(text: str, limit: int = 50) -> str:
    text = " ".join(text.split())
    return text[:limit] + "..." if len(text) > limit else text


def _print_tree(node: Node, depth: int = 0) -> None:
    indent = "  " * depth
    if isinstance(node, Text):
        click.echo(f'{indent}Text "{_preview(node.value)}"')
    elif isinstance(node, Slot):
        click.echo(f"{indent}Slot {{{{{_preview(node.script)}}}}}")
    elif isinstance(node, StyleElement):
        click.echo(f"{indent}StyleElement{stringify_attributes(node.attributes)} ({len(node.sheet.rules)} rules)")
        for rule in node.sheet.rules:
            if isinstance(rule, StyleRule):
                click.echo(f"{indent}  {stringify_selector(rule.selector)}")
            else:
                click.echo(f"{indent}  {type(rule).__name__}")
    elif isinstance(node, Element):
        click.echo(f"{indent}<{node.tag_name}{stringify_attributes(node.attributes)}>")
        for child in node.children:
            _print_tree(child, depth + 1)
    elif isinstance(node, Fragment):
        click.echo(f"{indent}Fragment ({len(node.children)} nodes)")
        for child in node.children:
            _print_tree(child, depth + 1)


@click.command(name="parse")
@click.argument("source_file", type=click.Path(exists=True))
@click.option("--strict", is_flag=True, help="Reject mismatched close tags and duplicate attributes")
def parse_command(source_file: str, strict: bool) -> None:
    """Parse a component file and display its tree structure."""
    path = Path(source_file)

    try:
        source = path.read_text(encoding="utf-8")
        tree = parse(source, CompilerConfig(strict=strict))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    _print_tree(tree)
