"""CLI command: sheetlint rules -- list the available checks."""

from __future__ import annotations

import click

from sheetlint.parser.builder import PARSE_ERROR
from sheetlint.rules import ALL_RULES


@click.command()
def rules() -> None:
    """List every rule id with a one-line description."""
    width = max(len(rule_id) for rule_id in ALL_RULES)
    for rule_id, check in ALL_RULES.items():
        summary = (check.__doc__ or "").strip().splitlines()
        click.echo(f"{rule_id.ljust(width)}  {summary[0] if summary else ''}")
    click.echo(f"{PARSE_ERROR.ljust(width)}  Malformed input found while parsing.")
