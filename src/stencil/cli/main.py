"""Stencil CLI entry point: Click group with subcommands."""

import logging

import click

from stencil import __version__


@click.group()
@click.version_option(version=__version__, prog_name="stencil")
@click.option("--verbose", "-v", is_flag=True, help="Log compiler activity to stderr")
def cli(verbose: bool) -> None:
    """Stencil - scoped component template compiler."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from stencil.cli.compile import compile_command  # noqa: E402
from stencil.cli.parse import parse_command  # noqa: E402
from stencil.cli.validate import validate  # noqa: E402

cli.add_command(parse_command)
cli.add_command(compile_command)
cli.add_command(validate)
