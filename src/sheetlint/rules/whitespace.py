"""Whitespace rules: indentation, spacing around braces, blank lines."""

from __future__ import annotations

from typing import Sequence

from sheetlint.config import LintConfig
from sheetlint.model.finding import Finding, Severity
from sheetlint.model.nodes import CommentNode, Node, RuleNode, StylesheetNode
from sheetlint.model.token import MARKER_KINDS, Token, TokenKind
from sheetlint.rules.base import continues_chain, iter_sibling_lists, split_lines

_STATEMENT_KINDS = frozenset({
    TokenKind.SELECTOR_TEXT,
    TokenKind.PROPERTY,
    TokenKind.VALUE,
    TokenKind.COLON,
    TokenKind.COMMA,
    TokenKind.AT_KEYWORD,
})


# ---------------------------------------------------------------------------
# Indentation
# ---------------------------------------------------------------------------


def _indent_problem(
    indent: str, expected: int, lenient: bool, width: int
) -> tuple[str, str] | None:
    """Return ``(message, fix)`` for a bad indent, or None."""
    want = " " * (expected * width)
    if "\t" in indent and " " in indent:
        return "Indentation mixes tabs and spaces.", f"Indent with {len(want)} spaces."
    if "\t" in indent:
        return f"Indentation uses tabs; indent with {width} spaces per level.", f"Indent with {len(want)} spaces."
    size = len(indent)
    if size % width:
        return (
            f"Indentation of {size} spaces is not a multiple of {width}.",
            f"Indent with {len(want)} spaces.",
        )
    if lenient:
        if size < len(want):
            return (
                f"Continuation line indented {size} spaces; expected at least {len(want)}.",
                f"Indent with at least {len(want)} spaces.",
            )
        return None
    if size != len(want):
        return (
            f"Expected indentation of {len(want)} spaces, found {size}.",
            f"Indent with {len(want)} spaces.",
        )
    return None


def check_indentation_consistency(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Leading indentation uses spaces only, one indent unit per nesting level."""
    findings: list[Finding] = []
    depth = 0
    in_statement = False
    for line in split_lines(tokens):
        content = [t for t in line if t.kind is not TokenKind.NEWLINE]
        lead = content[0] if content and content[0].kind is TokenKind.WHITESPACE else None
        body = content[1:] if lead else content
        if body and body[0].kind not in MARKER_KINDS:
            first = body[0]
            expected = depth - 1 if first.kind is TokenKind.CLOSE_BRACE else depth
            lenient = in_statement and first.kind is not TokenKind.SELECTOR_TEXT
            problem = _indent_problem(
                lead.raw if lead else "", max(0, expected), lenient, config.indent_width
            )
            if problem:
                message, fix = problem
                findings.append(
                    Finding(
                        rule="indentation-consistency",
                        severity=Severity.WARNING,
                        message=message,
                        position=lead.start if lead else first.start,
                        fix=fix,
                    )
                )

        for token in body:
            if token.kind is TokenKind.OPEN_BRACE:
                depth += 1
                in_statement = False
            elif token.kind is TokenKind.CLOSE_BRACE:
                depth = max(0, depth - 1)
                in_statement = False
            elif token.kind is TokenKind.SEMICOLON:
                in_statement = False
            elif token.kind in _STATEMENT_KINDS:
                in_statement = True
    return findings


def check_trailing_whitespace(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Lines do not end with spaces or tabs."""
    findings: list[Finding] = []
    for line in split_lines(tokens):
        content = [t for t in line if t.kind is not TokenKind.NEWLINE and t.kind not in MARKER_KINDS]
        if content and content[-1].kind is TokenKind.WHITESPACE:
            findings.append(
                Finding(
                    rule="trailing-whitespace",
                    severity=Severity.WARNING,
                    message="Line ends with trailing whitespace.",
                    position=content[-1].start,
                    fix="Remove the trailing whitespace.",
                )
            )
    return findings


# ---------------------------------------------------------------------------
# Braces
# ---------------------------------------------------------------------------


def check_brace_spacing(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Exactly one space separates a selector from its opening brace."""
    findings: list[Finding] = []
    for index, token in enumerate(tokens):
        if token.kind is not TokenKind.OPEN_BRACE:
            continue
        prev = tokens[index - 1] if index else None
        before = tokens[index - 2] if index > 1 else None
        if prev is None or prev.kind is TokenKind.NEWLINE or (
            prev.kind is TokenKind.WHITESPACE and (before is None or before.kind is TokenKind.NEWLINE)
        ):
            message = "Opening brace should be on the same line as its selector."
        elif prev.kind is not TokenKind.WHITESPACE:
            message = "Missing space before '{'."
        elif prev.raw != " ":
            message = f"Expected a single space before '{{', found {prev.raw!r}."
        else:
            continue
        findings.append(
            Finding(
                rule="brace-spacing",
                severity=Severity.WARNING,
                message=message,
                position=token.start,
                fix="Put exactly one space between the selector and '{'.",
            )
        )
    return findings


def check_closing_brace_alignment(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """A multi-line block's closing brace sits in the selector's first column.

    The blocks of an ``@if`` / ``@else`` chain all align with the ``@if``.
    """
    findings: list[Finding] = []
    for siblings in iter_sibling_lists(tree):
        previous: Node | None = None
        head: RuleNode | None = None
        for node in siblings:
            if isinstance(node, RuleNode):
                if head is None or not continues_chain(previous, node):
                    head = node
                findings.extend(_check_alignment(node, head))
            previous = node
    return findings


def _check_alignment(rule: RuleNode, head: RuleNode) -> list[Finding]:
    findings: list[Finding] = []
    if rule.close_brace is not None and not rule.is_single_line:
        column = head.start.column
        if rule.close_brace.column != column:
            findings.append(
                Finding(
                    rule="closing-brace-alignment",
                    severity=Severity.WARNING,
                    message=(
                        f"Closing brace at column {rule.close_brace.column} does not align "
                        f"with '{head.selectors[0].text}' at column {column}."
                    ),
                    position=rule.close_brace,
                    fix=f"Move '}}' to column {column} on its own line.",
                )
            )
    return findings


# ---------------------------------------------------------------------------
# Blank lines
# ---------------------------------------------------------------------------


def _end_line(node: Node) -> int:
    if isinstance(node, RuleNode):
        return node.end_line
    return node.end.line


def check_blank_line_between_rules(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Consecutive top-level rules are separated by the configured blank lines."""
    expected = config.blank_lines_between_rules
    children = tree.children
    findings: list[Finding] = []
    for index, node in enumerate(children):
        if not isinstance(node, RuleNode):
            continue
        # A comment attached to the rule belongs to it; measure above the comment.
        lead = index
        while (
            lead > 0
            and isinstance(children[lead - 1], CommentNode)
            and children[lead - 1].target is children[lead]
        ):
            lead -= 1
        # Comments trailing the previous rule's closing brace sit on its line.
        back = lead - 1
        while back >= 0 and isinstance(children[back], CommentNode) and children[back].trailing:
            back -= 1
        if back < 0 or not isinstance(children[back], RuleNode):
            continue
        if continues_chain(children[index - 1], node):
            continue
        leader = children[lead]
        found = leader.leading_blank_lines
        if found == expected:
            continue
        findings.append(
            Finding(
                rule="blank-line-between-rules",
                severity=Severity.WARNING,
                message=f"Expected {expected} blank line(s) between rules, found {found}.",
                position=leader.start,
                fix=f"Separate the rules with {expected} blank line(s).",
            )
        )
    return findings


def check_heading_comment_spacing(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Top-level comments have room above them and the configured gap below."""
    children = tree.children
    findings: list[Finding] = []
    for index, node in enumerate(children):
        if not isinstance(node, CommentNode):
            continue
        # Comments describing a declaration or at-statement are not headings.
        target = node.target
        if node.trailing or (target is not None and not isinstance(target, RuleNode)):
            continue
        previous = children[index - 1] if index else None
        # A comment stacked directly under another continues the same heading.
        stacked = (
            isinstance(previous, CommentNode)
            and not previous.trailing
            and node.leading_blank_lines == 0
        )
        if (
            previous is not None
            and not stacked
            and _end_line(previous) != node.start.line
            and node.leading_blank_lines < config.heading_blank_lines_before
        ):
            findings.append(
                Finding(
                    rule="heading-comment-spacing",
                    severity=Severity.WARNING,
                    message=(
                        f"Expected at least {config.heading_blank_lines_before} blank line(s) "
                        f"above comment, found {node.leading_blank_lines}."
                    ),
                    position=node.start,
                    fix="Add a blank line above the comment.",
                )
            )
        after = config.heading_blank_lines_after
        following = children[index + 1] if index + 1 < len(children) else None
        if (
            after is not None
            and isinstance(following, RuleNode)
            and node.trailing_blank_lines != after
        ):
            findings.append(
                Finding(
                    rule="heading-comment-spacing",
                    severity=Severity.WARNING,
                    message=(
                        f"Expected {after} blank line(s) below heading comment, "
                        f"found {node.trailing_blank_lines}."
                    ),
                    position=node.start,
                    fix=f"Leave {after} blank line(s) between the comment and the rule.",
                )
            )
    return findings
