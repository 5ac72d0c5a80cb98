"""Sheetlint CLI entry point: Click group with subcommands."""

import click

from sheetlint import __version__


@click.group()
@click.version_option(version=__version__, prog_name="sheetlint")
def cli() -> None:
    """Sheetlint - style-conformance linter for CSS and SCSS."""


# Import and register subcommands
from sheetlint.cli.check import check  # noqa: E402
from sheetlint.cli.rules import rules  # noqa: E402

cli.add_command(check)
cli.add_command(rules)
