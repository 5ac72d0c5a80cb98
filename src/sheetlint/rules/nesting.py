"""SASS rules: nesting limits and the order of @extend / @include."""

from __future__ import annotations

from typing import Sequence

from sheetlint.config import LintConfig
from sheetlint.model.finding import Finding, Severity
from sheetlint.model.nodes import AtStatementNode, CommentNode, DeclarationNode, RuleNode, StylesheetNode
from sheetlint.model.token import Token


def _selector_depth(ancestors: tuple[RuleNode, ...]) -> int:
    """Nesting depth counted in selector rules; at-rule blocks do not nest."""
    return sum(1 for a in ancestors if not a.is_at_rule)


def check_nesting_depth(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Rules nest no deeper than the configured limit.

    Only the first block of a chain to cross the limit is reported.
    """
    limit = config.max_nesting_depth
    findings: list[Finding] = []
    for rule, ancestors in tree.iter_rules():
        if rule.is_at_rule:
            continue
        depth = _selector_depth(ancestors)
        if depth <= limit or depth - 1 > limit:
            continue
        findings.append(
            Finding(
                rule="nesting-depth",
                severity=Severity.WARNING,
                message=(
                    f"'{rule.selectors[0].text}' is nested {depth} levels deep; "
                    f"the limit is {limit}."
                ),
                position=rule.start,
                fix="Flatten the selector instead of nesting it.",
            )
        )
    return findings


def check_nesting_span(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Nested blocks stay within the configured number of lines."""
    limit = config.max_nesting_span
    findings: list[Finding] = []
    for rule, ancestors in tree.iter_rules():
        if not _selector_depth(ancestors):
            continue
        span = rule.end_line - rule.line + 1
        if span > limit:
            findings.append(
                Finding(
                    rule="nesting-span",
                    severity=Severity.WARNING,
                    message=(
                        f"Nested block '{rule.selectors[0].text}' spans {span} lines; "
                        f"the limit is {limit}."
                    ),
                    position=rule.start,
                    fix="Move the nested block to the top level or split it up.",
                )
            )
    return findings


def _body(block: RuleNode) -> list[object]:
    return [c for c in block.children if not isinstance(c, CommentNode)]


def _is_at(node: object, keyword: str) -> bool:
    return isinstance(node, AtStatementNode) and node.keyword == keyword


def _is_variable(node: object) -> bool:
    return isinstance(node, DeclarationNode) and node.is_variable


def check_extend_position(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """@extend comes first in its block."""
    findings: list[Finding] = []
    for block in tree.iter_blocks():
        body = _body(block)
        for index, node in enumerate(body):
            if not _is_at(node, "extend"):
                continue
            if all(_is_at(n, "extend") or _is_variable(n) for n in body[:index]):
                continue
            assert isinstance(node, AtStatementNode)
            findings.append(
                Finding(
                    rule="extend-position",
                    severity=Severity.WARNING,
                    message="@extend should be the first statement in its block.",
                    position=node.start,
                    fix="Move @extend to the top of the block.",
                )
            )
    return findings


def check_include_position(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """@include comes before regular declarations."""
    findings: list[Finding] = []
    for block in tree.iter_blocks():
        seen_declaration = False
        for node in _body(block):
            if isinstance(node, DeclarationNode) and not node.is_variable:
                seen_declaration = True
            elif isinstance(node, AtStatementNode) and node.keyword not in ("extend", "include"):
                seen_declaration = True
            elif _is_at(node, "include") and seen_declaration:
                assert isinstance(node, AtStatementNode)
                findings.append(
                    Finding(
                        rule="include-position",
                        severity=Severity.WARNING,
                        message="@include should come before the block's declarations.",
                        position=node.start,
                        fix="Move @include above the declarations.",
                    )
                )
    return findings
