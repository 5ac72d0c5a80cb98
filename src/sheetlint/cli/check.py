"""CLI command: sheetlint check -- lint stylesheet files."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import click

from sheetlint.config import QUOTE_STYLES, ConfigError, LintConfig
from sheetlint.engine.runner import Linter
from sheetlint.model.finding import Severity
from sheetlint.report.reporter import render_json, render_text, report

STYLESHEET_SUFFIXES = (".css", ".scss")


def collect_paths(paths: tuple[str, ...]) -> list[Path]:
    """Expand directories into the stylesheets they contain, sorted."""
    collected: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            collected.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in STYLESHEET_SUFFIXES)
            )
        else:
            collected.append(path)
    return collected


def _parse_severities(values: tuple[str, ...]) -> dict[str, str]:
    severities: dict[str, str] = {}
    for value in values:
        rule, sep, level = value.partition("=")
        if not sep or not rule.strip():
            raise ConfigError(f"Expected RULE=LEVEL for --severity, got {value!r}")
        severities[rule.strip()] = level.strip()
    return severities


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--threshold",
    type=click.Choice([s.value for s in Severity]),
    default=Severity.WARNING.value,
    show_default=True,
    help="Lowest severity that makes the run fail",
)
@click.option(
    "--format", "output_format", type=click.Choice(["text", "json"]), default="text", help="Output format"
)
@click.option("--disable", multiple=True, help="Disable a rule (repeatable)")
@click.option("--enable", multiple=True, help="Run only these rules (repeatable)")
@click.option("--severity", "severities", multiple=True, help="Override a rule's severity as RULE=LEVEL")
@click.option("--indent-width", type=int, default=None, help="Spaces per indentation level")
@click.option("--quote-style", type=click.Choice(QUOTE_STYLES), default=None, help="Preferred quote character")
@click.option("--max-nesting-depth", type=int, default=None, help="Deepest allowed selector nesting")
@click.option("--max-nesting-span", type=int, default=None, help="Longest allowed nested block, in lines")
@click.option("--compact-max", type=int, default=None, help="Most declarations allowed in a one-line block")
@click.option("--function-namespace", default=None, help="Required prefix for custom functions")
@click.option("--class-pattern", default=None, help="Regular expression class names must match")
@click.option("--jobs", type=int, default=None, help="Number of worker threads")
@click.option("--show-fixes", is_flag=True, help="Print a suggested fix under each finding")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def check(
    paths: tuple[str, ...],
    threshold: str,
    output_format: str,
    disable: tuple[str, ...],
    enable: tuple[str, ...],
    severities: tuple[str, ...],
    indent_width: int | None,
    quote_style: str | None,
    max_nesting_depth: int | None,
    max_nesting_span: int | None,
    compact_max: int | None,
    function_namespace: str | None,
    class_pattern: str | None,
    jobs: int | None,
    show_fixes: bool,
    verbose: bool,
) -> None:
    """Lint CSS/SCSS files and directories.

    Exits with code 0 when no finding reaches the threshold, 1 otherwise,
    and 2 for an invalid configuration.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    options: dict[str, Any] = {
        "indent_width": indent_width,
        "quote_style": quote_style,
        "max_nesting_depth": max_nesting_depth,
        "max_nesting_span": max_nesting_span,
        "compact_max_declarations": compact_max,
        "function_namespace": function_namespace,
        "class_pattern": class_pattern,
    }
    data: dict[str, Any] = {k: v for k, v in options.items() if v is not None}
    if disable:
        data["disabled"] = disable
    if enable:
        data["enabled"] = enable

    try:
        if severities:
            data["severities"] = _parse_severities(severities)
        linter = Linter(LintConfig.from_mapping(data))
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    files = collect_paths(paths)
    if not files:
        click.echo("No stylesheets found.", err=True)
        sys.exit(0)

    findings = linter.lint_paths(files, max_workers=jobs)
    result = report(findings, threshold=Severity(threshold))

    if output_format == "json":
        click.echo(render_json(result))
    else:
        click.echo(render_text(result, show_fixes=show_fixes))
    sys.exit(result.exit_code)
