"""Layout rules: where selectors, declarations and semicolons go."""

from __future__ import annotations

from typing import Iterator, Sequence, Union

from sheetlint.config import LintConfig
from sheetlint.model.finding import Finding, Severity
from sheetlint.model.nodes import AtStatementNode, DeclarationNode, RuleNode, StylesheetNode
from sheetlint.model.token import Token
from sheetlint.rules.base import iter_selector_rules

Statement = Union[DeclarationNode, AtStatementNode]


def _statement_groups(tree: StylesheetNode) -> Iterator[tuple[RuleNode | None, list[Statement]]]:
    """Statements of the root and of every block, grouped by owner."""
    root = [c for c in tree.children if isinstance(c, (DeclarationNode, AtStatementNode))]
    yield None, root
    for block in tree.iter_blocks():
        yield block, list(block.statements)


def check_one_selector_per_line(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Each selector of a selector list starts on its own line."""
    findings: list[Finding] = []
    for rule in iter_selector_rules(tree):
        for previous, selector in zip(rule.selectors, rule.selectors[1:]):
            if selector.line == previous.line:
                findings.append(
                    Finding(
                        rule="one-selector-per-line",
                        severity=Severity.WARNING,
                        message=f"Selector '{selector.text}' shares a line with '{previous.text}'.",
                        position=selector.start,
                        fix="Put each selector on its own line.",
                    )
                )
    return findings


def check_one_declaration_per_line(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Declarations sit on separate lines, except in single-line compact blocks."""
    findings: list[Finding] = []
    for block, statements in _statement_groups(tree):
        if block is not None and block.is_single_line:
            continue
        for previous, statement in zip(statements, statements[1:]):
            if statement.line == previous.end.line:
                findings.append(
                    Finding(
                        rule="one-declaration-per-line",
                        severity=Severity.WARNING,
                        message="Declaration shares a line with the previous declaration.",
                        position=statement.start,
                        fix="Put each declaration on its own line.",
                    )
                )
    return findings


def check_compact_form_eligibility(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Single-line blocks hold no more than the configured number of declarations."""
    limit = config.compact_max_declarations
    findings: list[Finding] = []
    for block in tree.iter_blocks():
        count = len(block.statements)
        if block.is_single_line and count > limit:
            findings.append(
                Finding(
                    rule="compact-form-eligibility",
                    severity=Severity.WARNING,
                    message=(
                        f"Single-line block has {count} declarations; "
                        f"compact form allows at most {limit}."
                    ),
                    position=block.open_brace,
                    fix="Expand the block to one declaration per line.",
                )
            )
    return findings


def check_trailing_semicolon(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """The last declaration of a block ends with a semicolon."""
    findings: list[Finding] = []
    for _, statements in _statement_groups(tree):
        if statements and not statements[-1].has_semicolon:
            last = statements[-1]
            findings.append(
                Finding(
                    rule="trailing-semicolon",
                    severity=Severity.WARNING,
                    message="Missing semicolon after the last declaration.",
                    position=last.end,
                    fix="Add ';' after the declaration.",
                )
            )
    return findings
