"""Shared types and text helpers for rule checks.

Each check is a pure function taking the parsed tree, the token list and
the lint configuration, and returning a list of Finding objects.
"""

from __future__ import annotations

import re
from typing import Callable, Iterator, Sequence

from sheetlint.config import LintConfig
from sheetlint.model.finding import Finding
from sheetlint.model.nodes import AtStatementNode, DeclarationNode, Node, RuleNode, StylesheetNode
from sheetlint.model.token import Position, Token, TokenKind

RuleFunc = Callable[[StylesheetNode, Sequence[Token], LintConfig], list[Finding]]

_URL_RE = re.compile(r"url\(([^)]*)\)", re.IGNORECASE)


def position_at(start: Position, text: str, index: int) -> Position:
    """Position of ``text[index]`` given that *text* begins at *start*."""
    return start.advance(text[:index])


def mask_value(text: str) -> str:
    """Blank out string contents, comments and ``url()`` arguments.

    The result has the same length and line breaks as *text*, so indices
    found in it map straight back onto the source. Quote characters are
    kept so string boundaries stay visible.
    """
    out = list(text)
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in "\"'":
            j = i + 1
            while j < len(text) and text[j] != ch and text[j] != "\n":
                if text[j] == "\\":
                    j += 1
                j += 1
            for k in range(i + 1, min(j, len(text))):
                if out[k] != "\n":
                    out[k] = " "
            i = j + 1
        elif text.startswith("/*", i):
            close = text.find("*/", i + 2)
            j = len(text) if close == -1 else close + 2
            for k in range(i, j):
                if out[k] != "\n":
                    out[k] = " "
            i = j
        else:
            i += 1
    masked = "".join(out)
    for match in _URL_RE.finditer(masked):
        a, b = match.span(1)
        masked = masked[:a] + " " * (b - a) + masked[b:]
    return masked


def iter_strings(text: str) -> Iterator[tuple[int, str, str]]:
    """Yield ``(offset, quote, content)`` for each string literal in *text*.

    Comments are skipped; unterminated strings end at the line break.
    """
    i = 0
    while i < len(text):
        ch = text[i]
        if text.startswith("/*", i):
            close = text.find("*/", i + 2)
            i = len(text) if close == -1 else close + 2
            continue
        if ch in "\"'":
            j = i + 1
            while j < len(text) and text[j] != ch and text[j] != "\n":
                if text[j] == "\\":
                    j += 1
                j += 1
            yield i, ch, text[i + 1 : j]
            i = j + 1
            continue
        i += 1


def iter_value_texts(
    tree: StylesheetNode, skip: frozenset[str] = frozenset()
) -> Iterator[tuple[str, Position]]:
    """Every declaration value, at-statement parameter list and at-rule prelude.

    At-statements whose keyword is in *skip* are left out.
    """
    for node, _ in tree.walk():
        if isinstance(node, DeclarationNode) and node.value_start is not None:
            yield node.value, node.value_start
        elif (
            isinstance(node, AtStatementNode)
            and node.params_start is not None
            and node.keyword not in skip
        ):
            yield node.params, node.params_start
        elif isinstance(node, RuleNode) and node.prelude_start is not None:
            yield node.prelude, node.prelude_start


def iter_selector_rules(tree: StylesheetNode) -> Iterator[RuleNode]:
    """Rules with real selectors, excluding at-rule blocks and keyframe stops."""
    for rule, ancestors in tree.iter_rules():
        if rule.is_at_rule:
            continue
        if any(a.at_keyword and a.at_keyword.endswith("keyframes") for a in ancestors):
            continue
        yield rule


def iter_sibling_lists(tree: StylesheetNode) -> Iterator[tuple[Node, ...]]:
    """The top-level children, then the children of every block."""
    yield tree.children
    for rule in tree.iter_blocks():
        yield rule.children


def continues_chain(previous: Node | None, node: Node) -> bool:
    """True for an ``@else`` block opened on the line its predecessor closed."""
    return (
        isinstance(node, RuleNode)
        and node.at_keyword == "else"
        and isinstance(previous, RuleNode)
        and previous.close_brace is not None
        and previous.close_brace.line == node.start.line
    )


def split_lines(tokens: Sequence[Token]) -> list[list[Token]]:
    """Group tokens into physical lines; a NEWLINE token ends its line."""
    lines: list[list[Token]] = [[]]
    for token in tokens:
        lines[-1].append(token)
        if token.kind is TokenKind.NEWLINE:
            lines.append([])
    if not lines[-1]:
        lines.pop()
    return lines
