"""Selector rules: attribute quoting and class naming."""

from __future__ import annotations

from typing import Sequence

from sheetlint.config import LintConfig
from sheetlint.model.finding import Finding, Severity
from sheetlint.model.nodes import StylesheetNode
from sheetlint.model.token import Token
from sheetlint.parser.selectors import analyze_selector
from sheetlint.rules.base import iter_selector_rules, position_at


def check_attribute_selector_quoting(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Attribute selector values are quoted."""
    quote = config.preferred_quote
    findings: list[Finding] = []
    for rule in iter_selector_rules(tree):
        for selector in rule.selectors:
            parts = analyze_selector(selector.text)
            if parts is None:
                continue
            for attribute in parts.attributes:
                if attribute.value is None or attribute.quote is not None:
                    continue
                findings.append(
                    Finding(
                        rule="attribute-selector-quoting",
                        severity=Severity.WARNING,
                        message=(
                            f"Attribute selector value '{attribute.value}' "
                            f"in '[{attribute.name}]' should be quoted."
                        ),
                        position=position_at(selector.start, selector.text, attribute.offset),
                        fix=f"Use [{attribute.name}{attribute.operator}{quote}{attribute.value}{quote}].",
                    )
                )
    return findings


def check_selector_naming(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Class names follow the configured naming pattern (BEM by default)."""
    pattern = config.class_regex
    findings: list[Finding] = []
    for rule in iter_selector_rules(tree):
        for selector in rule.selectors:
            parts = analyze_selector(selector.text)
            if parts is None:
                continue
            for part in parts.classes:
                if part.is_interpolated or pattern.fullmatch(part.name):
                    continue
                findings.append(
                    Finding(
                        rule="selector-naming",
                        severity=Severity.WARNING,
                        message=f"Class name '{part.name}' does not match the naming pattern.",
                        position=position_at(selector.start, selector.text, part.offset),
                        fix="Use block__element--modifier names in lowercase, hyphen-delimited words.",
                    )
                )
    return findings
