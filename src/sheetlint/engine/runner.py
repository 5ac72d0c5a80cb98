"""Per-file and per-run pipeline: read, tokenize, parse, evaluate."""

from __future__ import annotations

import dataclasses
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Sequence, Union

from sheetlint.config import DEFAULT_CONFIG, LintConfig
from sheetlint.engine.engine import INTERNAL_ERROR, IO_ERROR, KNOWN_RULES, apply_config, evaluate
from sheetlint.lexer.tokenizer import tokenize
from sheetlint.model.finding import Finding, Severity
from sheetlint.parser.builder import parse

logger = logging.getLogger("sheetlint")

PathLike = Union[str, Path]


def lint_text(
    text: str, config: LintConfig = DEFAULT_CONFIG, path: str | None = None
) -> list[Finding]:
    """Lint one stylesheet held in memory; findings are unsorted."""
    tokens = tokenize(text)
    result = parse(tokens)
    findings = apply_config(result.findings, config)
    findings.extend(evaluate(result.tree, tokens, config))
    if path is not None:
        findings = [dataclasses.replace(f, path=path) for f in findings]
    return findings


def lint_file(path: PathLike, config: LintConfig = DEFAULT_CONFIG) -> list[Finding]:
    """Lint one file.

    A file that cannot be read or is not valid UTF-8 yields a single
    ``io-error`` finding without a position.
    """
    name = str(path)
    logger.debug("Linting %s", name)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read %s: %s", name, exc)
        return [
            Finding(
                rule=IO_ERROR,
                severity=Severity.ERROR,
                message=f"Cannot read file: {exc}",
                path=name,
            )
        ]
    return lint_text(text, config, path=name)


def lint_paths(
    paths: Sequence[PathLike],
    config: LintConfig = DEFAULT_CONFIG,
    max_workers: int | None = None,
    cancel: threading.Event | None = None,
) -> list[Finding]:
    """Lint many files in a thread pool; results are merged in input order.

    Setting *cancel* stops the run between files. Files that had not
    started are skipped; files already running finish.
    """

    def _run(path: PathLike) -> list[Finding]:
        if cancel is not None and cancel.is_set():
            logger.debug("Skipping %s: run cancelled", path)
            return []
        return lint_file(path, config)

    if not paths:
        return []
    findings: list[Finding] = []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures: list[tuple[PathLike, Future[list[Finding]]]] = [
            (path, pool.submit(_run, path)) for path in paths
        ]
        for path, future in futures:
            try:
                findings.extend(future.result())
            except Exception as exc:
                logger.exception("Linting %s failed", path)
                findings.append(
                    Finding(
                        rule=INTERNAL_ERROR,
                        severity=Severity.ERROR,
                        message=f"Linting failed: {type(exc).__name__}: {exc}",
                        path=str(path),
                    )
                )
    return findings


class Linter:
    """A configured linter. The configuration is checked up front."""

    def __init__(self, config: LintConfig = DEFAULT_CONFIG) -> None:
        config.check_rule_names(KNOWN_RULES)
        self.config = config

    def lint_text(self, text: str, path: str | None = None) -> list[Finding]:
        return lint_text(text, self.config, path=path)

    def lint_file(self, path: PathLike) -> list[Finding]:
        return lint_file(path, self.config)

    def lint_paths(
        self,
        paths: Sequence[PathLike],
        max_workers: int | None = None,
        cancel: threading.Event | None = None,
    ) -> list[Finding]:
        return lint_paths(paths, self.config, max_workers=max_workers, cancel=cancel)
