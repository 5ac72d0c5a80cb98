"""Rule engine and lint pipeline."""

from sheetlint.engine.engine import (
    INTERNAL_ERROR,
    IO_ERROR,
    KNOWN_RULES,
    apply_config,
    evaluate,
)
from sheetlint.engine.runner import Linter, lint_file, lint_paths, lint_text

__all__ = [
    "evaluate",
    "apply_config",
    "KNOWN_RULES",
    "INTERNAL_ERROR",
    "IO_ERROR",
    "Linter",
    "lint_text",
    "lint_file",
    "lint_paths",
]
