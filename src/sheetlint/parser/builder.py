"""Structural parser: builds a StylesheetNode tree from a token list.

Nesting follows brace depth, SASS style. Comments directly above a rule
or declaration (at most one blank line between) are attached to it;
comments followed by two or more blank lines, or by nothing, stay
unattached as section dividers.

Parsing never raises for malformed input. Problems are collected as
``parse-error`` findings and returned alongside the tree.
"""

from __future__ import annotations

import re
import weakref
from dataclasses import dataclass, field
from typing import Sequence, Union

from sheetlint.lexer.tokenizer import top_level_indices, unterminated_quote
from sheetlint.model.finding import Finding, Severity
from sheetlint.model.nodes import (
    AtStatementNode,
    CommentNode,
    CommentStyle,
    DeclarationNode,
    Node,
    RuleNode,
    Selector,
    StylesheetNode,
)
from sheetlint.model.token import MARKER_KINDS, Position, Token, TokenKind

__all__ = ["parse", "ParseResult", "PARSE_ERROR"]

PARSE_ERROR = "parse-error"

# Blank lines between a comment and the next node beyond which it is a divider.
_MAX_ATTACH_GAP = 1


@dataclass(frozen=True)
class ParseResult:
    """The parsed tree together with parse-level findings."""

    tree: StylesheetNode
    findings: tuple[Finding, ...] = ()


# ---------------------------------------------------------------------------
# Drafts: mutable while their block is open, frozen into nodes on close
# ---------------------------------------------------------------------------


@dataclass
class _CommentDraft:
    style: CommentStyle
    text: str
    start: Position
    end: Position
    leading_blank_lines: int
    trailing: bool = False


@dataclass
class _StatementDraft:
    tokens: list[Token]
    end: Position
    has_semicolon: bool
    leading_blank_lines: int
    comments: list[Token] = field(default_factory=list)


_Entry = Union[_CommentDraft, _StatementDraft, RuleNode]


@dataclass
class _Frame:
    selectors: tuple[Selector, ...] = ()
    start: Position | None = None
    open_brace: Position | None = None
    leading_blank_lines: int = 0
    at_keyword: str | None = None
    prelude: str = ""
    prelude_start: Position | None = None
    entries: list[_Entry] = field(default_factory=list)
    last_statement: _StatementDraft | None = None


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------


def _significant(tokens: Sequence[Token]) -> list[Token]:
    return [t for t in tokens if not t.is_trivia and not t.is_comment]


def _span_text(tokens: Sequence[Token], kinds: frozenset[TokenKind]) -> tuple[str, Position | None]:
    """Raw source text from the first to the last token of *kinds*."""
    indices = [i for i, t in enumerate(tokens) if t.kind in kinds]
    if not indices:
        return "", None
    span = tokens[indices[0] : indices[-1] + 1]
    return "".join(t.raw for t in span), span[0].start


def _split_parts(value: str) -> tuple[str, ...]:
    if not value:
        return ()
    bounds = [-1, *top_level_indices(value, ","), len(value)]
    return tuple(value[a + 1 : b].strip() for a, b in zip(bounds, bounds[1:]))


def _comment_style(token: Token) -> CommentStyle:
    if token.kind is TokenKind.COMMENT_LINE:
        return CommentStyle.LINE_RUN
    return CommentStyle.BLOCK


def _comment_node(token: Token) -> CommentNode:
    return CommentNode(
        style=_comment_style(token), text=token.raw, start=token.start, end=token.end
    )


_PROPERTY_KINDS = frozenset({TokenKind.PROPERTY})
_VALUE_KINDS = frozenset({TokenKind.VALUE})


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class _Parser:
    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self._frames: list[_Frame] = [_Frame()]
        self._statement: list[Token] = []
        self._statement_blank = 0
        self._newlines = 0
        self._seen_content = False
        self._last_comment: Token | None = None
        self._findings: list[Finding] = []

    @property
    def _frame(self) -> _Frame:
        return self._frames[-1]

    def parse(self) -> ParseResult:
        for token in self._tokens:
            self._feed(token)

        if self._statement:
            self._finish_statement(semicolon=None)
        while len(self._frames) > 1:
            frame = self._frame
            self._error(
                f"Unclosed block: '{frame.selectors[0].text}' is missing a closing '}}'.",
                frame.start,
                fix="Add the missing '}'.",
            )
            self._close_frame(close=None)

        root = self._frames[0]
        tree = StylesheetNode(children=self._build_children(root.entries))
        return ParseResult(tree=tree, findings=tuple(self._findings))

    # ---- dispatch ----

    def _feed(self, token: Token) -> None:
        kind = token.kind
        if kind is TokenKind.NEWLINE:
            self._newlines += 1
            if self._statement:
                self._statement.append(token)
            return
        if kind is TokenKind.WHITESPACE:
            if self._statement:
                self._statement.append(token)
            return
        if kind in MARKER_KINDS:
            self._marker(token)
            return

        if token.is_comment:
            self._comment(token)
        elif kind is TokenKind.SEMICOLON:
            if self._statement:
                self._finish_statement(semicolon=token)
        elif kind is TokenKind.OPEN_BRACE:
            self._open_frame(token)
        elif kind is TokenKind.CLOSE_BRACE:
            if self._statement:
                self._finish_statement(semicolon=None)
            if len(self._frames) == 1:
                self._error(
                    "Unexpected '}' with no open block.",
                    token.start,
                    fix="Remove the stray '}'.",
                )
            else:
                self._close_frame(close=token)
        else:
            if not self._statement:
                self._statement_blank = self._blank_lines()
            self._statement.append(token)

        self._newlines = 0
        self._seen_content = True

    def _blank_lines(self) -> int:
        if not self._seen_content:
            return self._newlines
        return max(0, self._newlines - 1)

    def _error(self, message: str, position: Position | None, fix: str | None = None) -> None:
        self._findings.append(
            Finding(
                rule=PARSE_ERROR,
                severity=Severity.ERROR,
                message=message,
                position=position,
                fix=fix,
            )
        )

    def _check_strings(self, tokens: list[Token]) -> None:
        if not tokens:
            return
        # Comments are blanked out so their quotes do not count.
        text = "".join(
            re.sub(r"[^\n]", " ", t.raw) if t.is_comment else t.raw for t in tokens
        )
        index = unterminated_quote(text)
        if index is not None:
            self._error(
                "Unterminated string.",
                tokens[0].start.advance(text[:index]),
                fix=f"Close the string with a matching {text[index]}.",
            )

    def _marker(self, token: Token) -> None:
        if token.kind is TokenKind.UNTERMINATED_COMMENT:
            start = self._last_comment.start if self._last_comment else token.start
            self._error("Unterminated comment.", start, fix="Close the comment with '*/'.")
        # Unclosed blocks are reported per frame when parsing ends.

    # ---- comments ----

    def _comment(self, token: Token) -> None:
        self._last_comment = token
        if self._statement:
            self._statement.append(token)
            return

        frame = self._frame
        last = frame.last_statement
        if last is not None and self._newlines == 0 and last.end.line == token.start.line:
            last.comments.append(token)
            return

        previous = frame.entries[-1] if frame.entries else None
        closes_line = (
            self._newlines == 0
            and isinstance(previous, RuleNode)
            and previous.close_brace is not None
            and previous.close_brace.line == token.start.line
        )
        if (
            token.kind is TokenKind.COMMENT_LINE
            and isinstance(previous, _CommentDraft)
            and previous.style is CommentStyle.LINE_RUN
            and not previous.trailing
            and self._newlines == 1
            and previous.end.line == token.start.line - 1
            and previous.start.column == token.start.column
        ):
            previous.text += "\n" + token.raw
            previous.end = token.end
            return

        frame.entries.append(
            _CommentDraft(
                style=_comment_style(token),
                text=token.raw,
                start=token.start,
                end=token.end,
                leading_blank_lines=self._blank_lines(),
                trailing=closes_line,
            )
        )
        frame.last_statement = None

    # ---- statements ----

    def _finish_statement(self, semicolon: Token | None) -> None:
        tokens = self._statement
        self._statement = []
        self._check_strings(tokens)
        significant = _significant(tokens)
        if not significant:
            return
        end = semicolon.end if semicolon is not None else significant[-1].end
        draft = _StatementDraft(
            tokens=tokens,
            end=end,
            has_semicolon=semicolon is not None,
            leading_blank_lines=self._statement_blank,
            comments=[t for t in tokens if t.is_comment],
        )
        first = significant[0]
        if first.kind is not TokenKind.AT_KEYWORD:
            self._check_declaration(tokens, first)
        self._frame.entries.append(draft)
        self._frame.last_statement = draft

    def _check_declaration(self, tokens: list[Token], first: Token) -> None:
        prop, _ = _span_text(tokens, _PROPERTY_KINDS)
        value, _ = _span_text(tokens, _VALUE_KINDS)
        has_colon = any(t.kind is TokenKind.COLON for t in tokens)
        label = prop.strip() or first.raw.strip()
        if not has_colon:
            self._error(
                f"Malformed declaration '{label}': expected 'property: value'.",
                first.start,
                fix="Separate the property and its value with ':'.",
            )
        elif not prop.strip():
            self._error(
                "Declaration is missing a property name.",
                first.start,
                fix="Add a property before ':'.",
            )
        elif not value.strip():
            self._error(
                f"Declaration '{label}' is missing a value.",
                first.start,
                fix="Add a value or remove the declaration.",
            )

    # ---- blocks ----

    def _open_frame(self, brace: Token) -> None:
        header = self._statement
        self._check_strings(header)
        blank = self._statement_blank if header else self._blank_lines()
        self._statement = []
        parent = self._frame
        parent.last_statement = None
        # Comments written inside the selector list precede the rule.
        for token in header:
            if token.is_comment:
                parent.entries.append(
                    _CommentDraft(
                        style=_comment_style(token),
                        text=token.raw,
                        start=token.start,
                        end=token.end,
                        leading_blank_lines=0,
                    )
                )

        significant = _significant(header)
        frame = _Frame(open_brace=brace.start, leading_blank_lines=blank)
        if not significant:
            self._error("Block has no selector.", brace.start, fix="Add a selector before '{'.")
            frame.selectors = (Selector(text="", start=brace.start),)
            frame.start = brace.start
        elif significant[0].kind is TokenKind.AT_KEYWORD:
            keyword = significant[0]
            frame.at_keyword = keyword.raw[1:].lower()
            frame.prelude, frame.prelude_start = _span_text(header, _VALUE_KINDS)
            text = "".join(t.raw for t in header[header.index(keyword) :]).strip()
            frame.selectors = (Selector(text=text, start=keyword.start),)
            frame.start = keyword.start
        else:
            frame.selectors = self._selectors(header)
            frame.start = frame.selectors[0].start
        self._frames.append(frame)

    def _selectors(self, header: list[Token]) -> tuple[Selector, ...]:
        groups: list[list[Token]] = [[]]
        for token in header:
            if token.kind is TokenKind.COMMA:
                groups.append([])
            elif not token.is_comment:
                groups[-1].append(token)

        selectors: list[Selector] = []
        for group in groups:
            significant = _significant(group)
            if not significant:
                continue
            first = group.index(significant[0])
            last = group.index(significant[-1])
            text = "".join(t.raw for t in group[first : last + 1])
            selectors.append(Selector(text=text, start=significant[0].start))
        return tuple(selectors)

    def _close_frame(self, close: Token | None) -> None:
        frame = self._frames.pop()
        assert frame.start is not None and frame.open_brace is not None
        node = RuleNode(
            selectors=frame.selectors,
            children=self._build_children(frame.entries),
            start=frame.start,
            open_brace=frame.open_brace,
            close_brace=close.start if close is not None else None,
            leading_blank_lines=frame.leading_blank_lines,
            at_keyword=frame.at_keyword,
            prelude=frame.prelude,
            prelude_start=frame.prelude_start,
        )
        parent = self._frame
        parent.entries.append(node)
        parent.last_statement = None

    # ---- freezing ----

    def _build_children(self, entries: list[_Entry]) -> tuple[Node, ...]:
        last_statement = max(
            (i for i, e in enumerate(entries) if isinstance(e, _StatementDraft)), default=-1
        )
        built: list[Node | None] = []
        for index, entry in enumerate(entries):
            if isinstance(entry, _StatementDraft):
                built.append(self._build_statement(entry, is_last=index == last_statement))
            elif isinstance(entry, RuleNode):
                built.append(entry)
            else:
                built.append(None)

        children: list[Node] = []
        for index, entry in enumerate(entries):
            node = built[index]
            if node is None:
                assert isinstance(entry, _CommentDraft)
                node = self._build_comment(entry, entries, built, index)
            children.append(node)
        return tuple(children)

    @staticmethod
    def _build_comment(
        draft: _CommentDraft,
        entries: list[_Entry],
        built: list[Node | None],
        index: int,
    ) -> CommentNode:
        following = built[index + 1] if index + 1 < len(built) else None
        trailing = 0
        ref = None
        if index + 1 < len(entries):
            trailing = entries[index + 1].leading_blank_lines
            if following is not None and trailing <= _MAX_ATTACH_GAP and not draft.trailing:
                ref = weakref.ref(following)
        return CommentNode(
            style=draft.style,
            text=draft.text,
            start=draft.start,
            end=draft.end,
            leading_blank_lines=draft.leading_blank_lines,
            trailing_blank_lines=trailing,
            trailing=draft.trailing,
            attached_to=ref,
        )

    @staticmethod
    def _build_statement(
        draft: _StatementDraft, is_last: bool
    ) -> DeclarationNode | AtStatementNode:
        tokens = draft.tokens
        significant = _significant(tokens)
        first = significant[0]
        comment = _comment_node(draft.comments[0]) if draft.comments else None

        if first.kind is TokenKind.AT_KEYWORD:
            params, params_start = _span_text(tokens, _VALUE_KINDS)
            return AtStatementNode(
                keyword=first.raw[1:].lower(),
                params=params,
                start=first.start,
                end=draft.end,
                params_start=params_start,
                has_semicolon=draft.has_semicolon,
                is_last=is_last,
                comment=comment,
                leading_blank_lines=draft.leading_blank_lines,
            )

        prop, _ = _span_text(tokens, _PROPERTY_KINDS)
        value, value_start = _span_text(tokens, _VALUE_KINDS)
        colon = next((t.start for t in tokens if t.kind is TokenKind.COLON), None)
        if not prop:
            prop = first.raw
        return DeclarationNode(
            property=prop.strip(),
            value=value,
            start=first.start,
            end=draft.end,
            colon=colon,
            value_start=value_start,
            value_parts=_split_parts(value),
            has_semicolon=draft.has_semicolon,
            is_last=is_last,
            malformed=colon is None,
            comment=comment,
            leading_blank_lines=draft.leading_blank_lines,
        )


def parse(tokens: Sequence[Token]) -> ParseResult:
    """Build the stylesheet tree from *tokens*; never raises on malformed input."""
    return _Parser(tokens).parse()
