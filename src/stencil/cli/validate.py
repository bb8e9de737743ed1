"""CLI command: stencil validate -- lint a component file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stencil.model.diagnostic import Severity, by_severity, summarize
from stencil.parser import ParseError, parse
from stencil.validation import validate as run_validate


@click.command()
@click.argument("source_file", type=click.Path(exists=True))
@click.option("--strict", is_flag=True, help="Treat duplicate attributes as errors")
@click.option("--fixes", is_flag=True, help="Print a suggested fix under each finding")
@click.option("--ignore", multiple=True, metavar="RULE", help="Skip a lint rule (repeatable)")
def validate(source_file: str, strict: bool, fixes: bool, ignore: tuple[str, ...]) -> None:
    """Lint a component file.

    The file is parsed leniently so that repeated attributes show up as
    findings instead of parse errors. Exits 1 when any ERROR is reported.
    """
    path = Path(source_file)
    try:
        tree = parse(path.read_text(encoding="utf-8"))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    diagnostics = by_severity(run_validate(tree, strict=strict, ignore=ignore))
    if not diagnostics:
        click.echo(f"OK: {path.name} is valid (0 diagnostics)")
        return

    for diag in diagnostics:
        click.echo(str(diag))
        if fixes and diag.fix:
            click.echo(f"  fix: {diag.fix}")

    counts = summarize(diagnostics)
    click.echo()
    click.echo(
        f"Summary: {counts[Severity.ERROR]} error(s), "
        f"{counts[Severity.WARNING]} warning(s), {counts[Severity.INFO]} info"
    )
    if counts[Severity.ERROR]:
        sys.exit(1)
