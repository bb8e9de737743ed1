"""CLI command: stencil compile -- emit scoped markup and CSS."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stencil.compiler import compile_component
from stencil.config import MAX_DEPTH_LIMIT, CompilerConfig
from stencil.css.errors import EvalError
from stencil.css.stringify import stringify_virtual_sheet
from stencil.model.virt import VirtualElement, VirtualFragment, VirtualNode, VirtualStyleElement
from stencil.parser import ParseError
from stencil.serialize import stringify_virtual_node


def _style_elements(node: VirtualNode) -> list[VirtualStyleElement]:
    if isinstance(node, VirtualStyleElement):
        return [node]
    if isinstance(node, (VirtualElement, VirtualFragment)):
        found: list[VirtualStyleElement] = []
        for child in node.children:
            found.extend(_style_elements(child))
        return found
    return []


@click.command(name="compile")
@click.argument("source_file", type=click.Path(exists=True))
@click.option("--scope", required=True, help="Scope token identifying this component")
@click.option("--scope-prefix", default="data-pc-", show_default=True, help="Scope attribute prefix")
@click.option("--css-only", is_flag=True, help="Print only the scoped stylesheets")
@click.option("--strict", is_flag=True, help="Reject mismatched close tags and duplicate attributes")
@click.option(
    "--max-depth",
    type=click.IntRange(1, MAX_DEPTH_LIMIT),
    default=MAX_DEPTH_LIMIT,
    show_default=True,
    help="Deepest element and selector nesting accepted",
)
def compile_command(
    source_file: str,
    scope: str,
    scope_prefix: str,
    css_only: bool,
    strict: bool,
    max_depth: int,
) -> None:
    """Compile a component file into scoped markup.

    Every element is tagged with the scope attribute and every <style>
    selector is rewritten to match only tagged elements.
    """
    path = Path(source_file)
    config = CompilerConfig(scope_prefix=scope_prefix, strict=strict, max_depth=max_depth)

    try:
        source = path.read_text(encoding="utf-8")
        result = compile_component(source, scope, config)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    except EvalError as exc:
        click.echo(f"Evaluation error: {exc}", err=True)
        sys.exit(1)

    if css_only:
        for style in _style_elements(result):
            click.echo(stringify_virtual_sheet(style.sheet), nl=False)
    else:
        click.echo(stringify_virtual_node(result))
