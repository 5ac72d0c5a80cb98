"""Lexical tokens produced by the tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Kind of a lexical token."""

    SELECTOR_TEXT = "selector-text"
    OPEN_BRACE = "open-brace"
    CLOSE_BRACE = "close-brace"
    PROPERTY = "property"
    VALUE = "value"
    COLON = "colon"
    SEMICOLON = "semicolon"
    COMMA = "comma"
    COMMENT_LINE = "comment-line"
    COMMENT_BLOCK = "comment-block"
    AT_KEYWORD = "at-rule-keyword"
    WHITESPACE = "whitespace-run"
    NEWLINE = "newline"
    # Zero-width markers, only ever emitted at end of input.
    UNTERMINATED_COMMENT = "unterminated-comment"
    UNCLOSED_BLOCK = "unclosed-block"


COMMENT_KINDS = frozenset({TokenKind.COMMENT_LINE, TokenKind.COMMENT_BLOCK})
TRIVIA_KINDS = frozenset({TokenKind.WHITESPACE, TokenKind.NEWLINE})
MARKER_KINDS = frozenset({TokenKind.UNTERMINATED_COMMENT, TokenKind.UNCLOSED_BLOCK})


@dataclass(frozen=True, order=True)
class Position:
    """A location in the source text.

    ``line`` and ``column`` are 1-based; ``offset`` is the 0-based index
    into the decoded text.
    """

    line: int
    column: int
    offset: int

    def advance(self, text: str) -> Position:
        """Return the position reached after consuming *text*."""
        newlines = text.count("\n")
        if newlines:
            tail = len(text) - text.rfind("\n") - 1
            return Position(self.line + newlines, tail + 1, self.offset + len(text))
        return Position(self.line, self.column + len(text), self.offset + len(text))

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


START = Position(line=1, column=1, offset=0)


@dataclass(frozen=True)
class Token:
    """A single lexical token with its source span."""

    kind: TokenKind
    raw: str
    start: Position
    end: Position

    @property
    def is_trivia(self) -> bool:
        return self.kind in TRIVIA_KINDS

    @property
    def is_comment(self) -> bool:
        return self.kind in COMMENT_KINDS

    def __repr__(self) -> str:
        return f"Token({self.kind.value}, {self.raw!r}, {self.start})"
