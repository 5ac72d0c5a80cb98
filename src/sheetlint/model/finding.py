"""Finding model: structured lint results for stylesheet analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sheetlint.model.token import Position


class Severity(Enum):
    """Severity level for a finding."""

    ERROR = "error"
    WARNING = "warning"

    @property
    def rank(self) -> int:
        return 2 if self is Severity.ERROR else 1

    def at_least(self, threshold: Severity) -> bool:
        return self.rank >= threshold.rank


@dataclass(frozen=True)
class Finding:
    """A single rule violation found in a stylesheet.

    Attributes:
        rule: Identifier of the check that produced this finding.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        position: Where the problem starts, or None for file-level problems.
        fix: Suggested remediation text, if available. Never applied.
        path: The file the finding belongs to, once known.
    """

    rule: str
    severity: Severity
    message: str
    position: Position | None = None
    fix: str | None = None
    path: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    @property
    def line(self) -> int:
        return self.position.line if self.position else 0

    @property
    def column(self) -> int:
        return self.position.column if self.position else 0

    def sort_key(self) -> tuple[str, int, int, str]:
        return (self.path or "", self.line, self.column, self.rule)

    def __str__(self) -> str:
        location = f" [{self.position}]" if self.position else ""
        return f"{self.severity.value.upper()}{location} {self.rule}: {self.message}"
