"""Structural model of a parsed stylesheet.

Every node is built once by the parser and is read-only afterwards. A
parent exclusively owns its children; comments point at the node they
describe through a weak reference only.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union

from sheetlint.model.token import Position


class CommentStyle(Enum):
    """How a comment was written."""

    LINE_RUN = "line-comment-run"  # one or more consecutive // lines
    BLOCK = "block-comment"  # /* ... */


@dataclass(frozen=True)
class Selector:
    """One comma-separated selector of a rule, whitespace-trimmed."""

    text: str
    start: Position

    @property
    def line(self) -> int:
        return self.start.line


@dataclass(frozen=True)
class CommentNode:
    """A comment, or a run of consecutive line comments."""

    style: CommentStyle
    text: str
    start: Position
    end: Position
    leading_blank_lines: int = 0
    trailing_blank_lines: int = 0
    # Written after a closing brace on the same line.
    trailing: bool = False
    attached_to: weakref.ReferenceType | None = field(
        default=None, compare=False, repr=False
    )

    @property
    def target(self) -> Node | None:
        """The node this comment describes, if it is attached and still alive."""
        if self.attached_to is None:
            return None
        return self.attached_to()

    @property
    def is_attached(self) -> bool:
        return self.attached_to is not None

    @property
    def line(self) -> int:
        return self.start.line


@dataclass(frozen=True)
class DeclarationNode:
    """A ``property: value`` declaration.

    Malformed declarations (no ``:`` separator) are kept as placeholders
    with ``malformed=True`` and an empty value.
    """

    property: str
    value: str
    start: Position
    end: Position
    colon: Position | None = None
    value_start: Position | None = None
    value_parts: tuple[str, ...] = ()
    has_semicolon: bool = True
    is_last: bool = False
    malformed: bool = False
    comment: CommentNode | None = None
    leading_blank_lines: int = 0

    @property
    def line(self) -> int:
        return self.start.line

    @property
    def is_custom_property(self) -> bool:
        return self.property.startswith("--")

    @property
    def is_variable(self) -> bool:
        return self.property.startswith("$")


@dataclass(frozen=True)
class AtStatementNode:
    """A block-less at-rule such as ``@extend``, ``@include`` or ``@import``."""

    keyword: str
    params: str
    start: Position
    end: Position
    params_start: Position | None = None
    has_semicolon: bool = True
    is_last: bool = False
    comment: CommentNode | None = None
    leading_blank_lines: int = 0

    @property
    def line(self) -> int:
        return self.start.line


@dataclass(frozen=True)
class RuleNode:
    """A rule block: selectors, then declarations and nested blocks.

    At-rule blocks (``@media``, ``@include mixin { ... }``) are RuleNodes
    too; ``at_keyword`` is set and the single selector holds the full
    prelude text.
    """

    selectors: tuple[Selector, ...]
    children: tuple[Node, ...]
    start: Position
    open_brace: Position
    close_brace: Position | None = None
    leading_blank_lines: int = 0
    at_keyword: str | None = None
    prelude: str = ""
    prelude_start: Position | None = None

    @property
    def line(self) -> int:
        return self.start.line

    @property
    def is_at_rule(self) -> bool:
        return self.at_keyword is not None

    @property
    def end_line(self) -> int:
        if self.close_brace is not None:
            return self.close_brace.line
        last = self.line
        for child in self.children:
            child_end = child.end_line if isinstance(child, RuleNode) else child.end.line
            last = max(last, child_end)
        return last

    @property
    def is_single_line(self) -> bool:
        return self.close_brace is not None and self.close_brace.line == self.open_brace.line

    @property
    def declarations(self) -> tuple[DeclarationNode, ...]:
        return tuple(c for c in self.children if isinstance(c, DeclarationNode))

    @property
    def statements(self) -> tuple[DeclarationNode | AtStatementNode, ...]:
        """Declarations and block-less at-rules, in source order."""
        return tuple(
            c for c in self.children if isinstance(c, (DeclarationNode, AtStatementNode))
        )

    @property
    def rules(self) -> tuple[RuleNode, ...]:
        return tuple(c for c in self.children if isinstance(c, RuleNode))

    @property
    def comments(self) -> tuple[CommentNode, ...]:
        return tuple(c for c in self.children if isinstance(c, CommentNode))


Node = Union[RuleNode, DeclarationNode, AtStatementNode, CommentNode]


@dataclass(frozen=True)
class StylesheetNode:
    """The root of a parsed stylesheet; children are in source order."""

    children: tuple[Node, ...] = ()

    @property
    def rules(self) -> tuple[RuleNode, ...]:
        return tuple(c for c in self.children if isinstance(c, RuleNode))

    @property
    def comments(self) -> tuple[CommentNode, ...]:
        return tuple(c for c in self.children if isinstance(c, CommentNode))

    def walk(self) -> Iterator[tuple[Node, tuple[RuleNode, ...]]]:
        """Yield every node depth-first with its chain of enclosing rules."""
        stack: list[tuple[Node, tuple[RuleNode, ...]]] = [
            (child, ()) for child in reversed(self.children)
        ]
        while stack:
            node, ancestors = stack.pop()
            yield node, ancestors
            if isinstance(node, RuleNode):
                inner = ancestors + (node,)
                stack.extend((child, inner) for child in reversed(node.children))

    def iter_rules(self) -> Iterator[tuple[RuleNode, tuple[RuleNode, ...]]]:
        for node, ancestors in self.walk():
            if isinstance(node, RuleNode):
                yield node, ancestors

    def iter_blocks(self) -> Iterator[RuleNode]:
        for node, _ in self.iter_rules():
            yield node
