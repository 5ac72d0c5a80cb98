"""Lossless tokenizer for CSS and SCSS stylesheets.

Whitespace, newlines and comments are kept as tokens so that layout
checks can see them, and concatenating the ``raw`` text of every token
reproduces the input exactly.

Statements are classified by what terminates them::

    .a, .b {          -> selector-text, comma, selector-text, open-brace
      color: red;     -> property, colon, value, semicolon
      @extend %x;     -> at-rule-keyword, value, semicolon
    }

The tokenizer never raises. A string is closed at the next line break;
the parser reports it. An unterminated block comment or an
unclosed brace produces a zero-width marker token at end of input.
"""

from __future__ import annotations

import re

from sheetlint.model.token import START, Token, TokenKind

__all__ = ["tokenize", "Tokenizer", "top_level_indices", "unterminated_quote"]

_NEWLINE_RE = re.compile(r"\r\n|\n")
_PAD_RE = re.compile(r"^([ \t\f\r]*)(.*?)([ \t\f\r]*)$", re.DOTALL)
_AT_KEYWORD_RE = re.compile(r"@[\w-]*")
_INLINE_SPACE = " \t\f"

# Statement classes, decided once per statement by its terminator.
_SELECTOR = "selector"
_DECLARATION = "declaration"
_AT_RULE = "at-rule"


def top_level_indices(text: str, target: str) -> list[int]:
    """Indices of *target* characters outside strings, parens and brackets."""
    hits: list[int] = []
    depth = 0
    quote: str | None = None
    i = 0
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif text.startswith("#{", i):
            depth += 1
            i += 2
            continue
        elif ch in "([":
            depth += 1
        elif ch in ")]}" and depth:
            depth -= 1
        elif ch == target and depth == 0:
            hits.append(i)
        i += 1
    return hits


def unterminated_quote(text: str) -> int | None:
    """Index of a quote whose string runs into a line break or the end of *text*."""
    quote: str | None = None
    opened = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == "\n":
                return opened
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
            opened = i
        i += 1
    return opened if quote else None


class Tokenizer:
    """Single-use tokenizer over one stylesheet text."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._index = 0
        self._pos = START
        self._tokens: list[Token] = []
        self._depth = 0
        self._statement: str | None = None
        self._seen_colon = False
        self._unterminated_comment = False

    def tokenize(self) -> list[Token]:
        text = self._text
        while self._index < len(text):
            i = self._index
            ch = text[i]
            if ch == "\n":
                self._emit(TokenKind.NEWLINE, "\n")
            elif text.startswith("\r\n", i):
                self._emit(TokenKind.NEWLINE, "\r\n")
            elif ch in _INLINE_SPACE or ch == "\r":
                self._consume_whitespace()
            elif text.startswith("/*", i):
                self._consume_block_comment()
            elif text.startswith("//", i):
                self._consume_line_comment()
            elif ch == "{":
                self._emit(TokenKind.OPEN_BRACE, ch)
                self._depth += 1
                self._end_statement()
            elif ch == "}":
                self._emit(TokenKind.CLOSE_BRACE, ch)
                self._depth = max(0, self._depth - 1)
                self._end_statement()
            elif ch == ";":
                self._emit(TokenKind.SEMICOLON, ch)
                self._end_statement()
            else:
                self._consume_segment()

        if self._unterminated_comment:
            self._emit(TokenKind.UNTERMINATED_COMMENT, "")
        if self._depth:
            self._emit(TokenKind.UNCLOSED_BLOCK, "")
        return self._tokens

    # ---- emission ----

    def _emit(self, kind: TokenKind, raw: str) -> None:
        start = self._pos
        end = start.advance(raw)
        self._tokens.append(Token(kind=kind, raw=raw, start=start, end=end))
        self._pos = end
        self._index += len(raw)

    def _emit_padded(self, text: str, kind: TokenKind) -> None:
        """Emit *text* (no newlines) as leading space, body, trailing space."""
        lead, body, trail = _PAD_RE.match(text).groups()  # type: ignore[union-attr]
        if lead:
            self._emit(TokenKind.WHITESPACE, lead)
        if body:
            self._emit(kind, body)
        if trail:
            self._emit(TokenKind.WHITESPACE, trail)

    def _emit_lines(self, text: str, kind: TokenKind) -> None:
        """Emit a multi-line run of *kind* text, one body token per line."""
        start = 0
        for match in _NEWLINE_RE.finditer(text):
            self._emit_line(text[start : match.start()], kind)
            self._emit(TokenKind.NEWLINE, match.group())
            start = match.end()
        self._emit_line(text[start:], kind)

    def _emit_line(self, line: str, kind: TokenKind) -> None:
        if kind is not TokenKind.SELECTOR_TEXT:
            self._emit_padded(line, kind)
            return
        start = 0
        for comma in top_level_indices(line, ","):
            self._emit_padded(line[start:comma], kind)
            self._emit(TokenKind.COMMA, ",")
            start = comma + 1
        self._emit_padded(line[start:], kind)

    # ---- consumers ----

    def _consume_whitespace(self) -> None:
        text = self._text
        end = self._index
        while end < len(text) and (
            text[end] in _INLINE_SPACE or (text[end] == "\r" and not text.startswith("\r\n", end))
        ):
            end += 1
        self._emit(TokenKind.WHITESPACE, text[self._index : end])

    def _consume_block_comment(self) -> None:
        close = self._text.find("*/", self._index + 2)
        if close == -1:
            self._unterminated_comment = True
            self._emit(TokenKind.COMMENT_BLOCK, self._text[self._index :])
        else:
            self._emit(TokenKind.COMMENT_BLOCK, self._text[self._index : close + 2])

    def _consume_line_comment(self) -> None:
        end = self._text.find("\n", self._index)
        if end == -1:
            end = len(self._text)
        elif self._text[end - 1] == "\r":
            end -= 1
        self._emit(TokenKind.COMMENT_LINE, self._text[self._index : end])

    def _consume_segment(self) -> None:
        """Consume statement text up to the next brace, semicolon or comment."""
        if self._statement is None:
            self._statement = self._classify()
        end = self._scan(self._index, stop_at_comments=True)
        segment = self._text[self._index : end]

        if self._statement == _SELECTOR:
            self._emit_lines(segment, TokenKind.SELECTOR_TEXT)
        elif self._statement == _AT_RULE:
            match = _AT_KEYWORD_RE.match(segment)
            if match:
                self._emit(TokenKind.AT_KEYWORD, match.group())
                segment = segment[match.end() :]
            self._emit_lines(segment, TokenKind.VALUE)
        elif self._seen_colon:
            self._emit_lines(segment, TokenKind.VALUE)
        else:
            colons = top_level_indices(segment, ":")
            if colons:
                self._seen_colon = True
                self._emit_lines(segment[: colons[0]], TokenKind.PROPERTY)
                self._emit(TokenKind.COLON, ":")
                self._emit_lines(segment[colons[0] + 1 :], TokenKind.VALUE)
            else:
                self._emit_lines(segment, TokenKind.PROPERTY)

    def _classify(self) -> str:
        if self._text[self._index] == "@":
            return _AT_RULE
        end = self._scan(self._index, stop_at_comments=False)
        if end < len(self._text) and self._text[end] == "{":
            return _SELECTOR
        return _DECLARATION

    def _end_statement(self) -> None:
        self._statement = None
        self._seen_colon = False

    def _scan(self, i: int, stop_at_comments: bool) -> int:
        """Index of the next top-level ``{``, ``}`` or ``;`` (or comment) from *i*."""
        text = self._text
        depth = 0
        quote: str | None = None
        while i < len(text):
            ch = text[i]
            if quote:
                if ch == "\\":
                    i += 2
                    continue
                if ch == quote or ch == "\n":
                    quote = None
                i += 1
                continue
            if depth == 0 and (text.startswith("/*", i) or text.startswith("//", i)):
                if stop_at_comments:
                    return i
                if text.startswith("/*", i):
                    close = text.find("*/", i + 2)
                    if close == -1:
                        return len(text)
                    i = close + 2
                else:
                    newline = text.find("\n", i)
                    if newline == -1:
                        return len(text)
                    i = newline
                continue
            if ch in "\"'":
                quote = ch
            elif text.startswith("#{", i):
                depth += 1
                i += 2
                continue
            elif ch in "([":
                depth += 1
            elif ch in ")]" or (ch == "}" and depth):
                depth = max(0, depth - 1)
            elif ch in "{};" and depth == 0:
                return i
            i += 1
        return len(text)


def tokenize(text: str) -> list[Token]:
    """Tokenize *text* into a flat list of tokens covering every character."""
    return Tokenizer(text).tokenize()
