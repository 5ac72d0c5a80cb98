"""Reporter: orders findings, counts them and renders them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Iterable

from sheetlint.model.finding import Finding, Severity


@dataclass(frozen=True)
class Report:
    """Sorted findings with a per-severity summary.

    ``threshold`` only affects :attr:`exit_code`; findings below it are
    still listed.
    """

    findings: tuple[Finding, ...] = ()
    counts: dict[Severity, int] = field(default_factory=dict)
    threshold: Severity = Severity.WARNING

    @property
    def errors(self) -> int:
        return self.counts.get(Severity.ERROR, 0)

    @property
    def warnings(self) -> int:
        return self.counts.get(Severity.WARNING, 0)

    @property
    def failing(self) -> tuple[Finding, ...]:
        """Findings at or above the threshold."""
        return tuple(f for f in self.findings if f.severity.at_least(self.threshold))

    @property
    def exit_code(self) -> int:
        return 1 if self.failing else 0


def report(findings: Iterable[Finding], threshold: Severity = Severity.WARNING) -> Report:
    """Build a :class:`Report` sorted by (path, line, column, rule)."""
    ordered = tuple(sorted(findings, key=Finding.sort_key))
    counts = {severity: 0 for severity in Severity}
    for finding in ordered:
        counts[finding.severity] += 1
    return Report(findings=ordered, counts=counts, threshold=threshold)


def _location(finding: Finding) -> str:
    path = finding.path or "<stdin>"
    if finding.position is None:
        return path
    return f"{path}:{finding.line}:{finding.column}"


def format_finding(finding: Finding) -> str:
    return f"{_location(finding)}: [{finding.severity.value}] {finding.rule} - {finding.message}"


def render_text(result: Report, show_fixes: bool = False) -> str:
    """One line per finding followed by a summary line."""
    lines: list[str] = []
    for finding in result.findings:
        lines.append(format_finding(finding))
        if show_fixes and finding.fix:
            lines.append(f"    fix: {finding.fix}")
    if lines:
        lines.append("")
    lines.append(f"Summary: {result.errors} error(s), {result.warnings} warning(s)")
    return "\n".join(lines)


def finding_to_dict(finding: Finding) -> dict[str, object]:
    return {
        "file": finding.path,
        "line": finding.position.line if finding.position else None,
        "column": finding.position.column if finding.position else None,
        "rule": finding.rule,
        "severity": finding.severity.value,
        "message": finding.message,
    }


def render_json(result: Report) -> str:
    return json.dumps([finding_to_dict(f) for f in result.findings], indent=2)
