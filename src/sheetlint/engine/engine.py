"""Rule engine: runs the registered checks over one parsed stylesheet."""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, Mapping, Sequence

from sheetlint.config import DEFAULT_CONFIG, LintConfig
from sheetlint.model.finding import Finding, Severity
from sheetlint.model.nodes import StylesheetNode
from sheetlint.model.token import Token
from sheetlint.parser.builder import PARSE_ERROR
from sheetlint.rules import ALL_RULES, RuleFunc

logger = logging.getLogger("sheetlint")

INTERNAL_ERROR = "internal-error"
IO_ERROR = "io-error"

# Every rule id a configuration may refer to.
KNOWN_RULES: tuple[str, ...] = (*ALL_RULES, PARSE_ERROR)


def apply_config(findings: Iterable[Finding], config: LintConfig) -> list[Finding]:
    """Drop findings of disabled rules and apply severity overrides."""
    result: list[Finding] = []
    for finding in findings:
        if not config.is_enabled(finding.rule):
            continue
        severity = config.severity_for(finding.rule, finding.severity)
        if severity is not finding.severity:
            finding = dataclasses.replace(finding, severity=severity)
        result.append(finding)
    return result


def evaluate(
    tree: StylesheetNode,
    tokens: Sequence[Token],
    config: LintConfig = DEFAULT_CONFIG,
    rules: Mapping[str, RuleFunc] | None = None,
) -> list[Finding]:
    """Run every enabled check against *tree* and *tokens*.

    Checks are independent. A check that raises is reported as a single
    ``internal-error`` finding and the remaining checks still run.
    Duplicate findings from one check are collapsed; findings from
    different checks are never merged.
    """
    registry = ALL_RULES if rules is None else rules
    findings: list[Finding] = []
    for rule_id, check in registry.items():
        if not config.is_enabled(rule_id):
            continue
        logger.debug("Running check %s", rule_id)
        try:
            produced = check(tree, tokens, config)
        except Exception as exc:
            logger.exception("Check %s failed", rule_id)
            findings.append(
                Finding(
                    rule=INTERNAL_ERROR,
                    severity=Severity.ERROR,
                    message=f"Check '{rule_id}' failed: {type(exc).__name__}: {exc}",
                )
            )
            continue
        findings.extend(apply_config(dict.fromkeys(produced), config))
    return findings
