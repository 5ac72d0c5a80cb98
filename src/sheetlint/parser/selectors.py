"""Lark-based analysis of individual selectors.

Extracts the class names, ids and attribute selectors of one selector
so that naming and quoting checks do not have to re-scan raw text.
Selector arguments of pseudo-classes such as ``:not()`` and ``:is()``
are analyzed too, with offsets relative to the outer selector.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from sheetlint.lexer.tokenizer import top_level_indices

__all__ = ["AttributeSelector", "NamePart", "SelectorParts", "analyze_selector"]

GRAMMAR_PATH = Path(__file__).parent / "selector.lark"

logger = logging.getLogger("sheetlint")

# Pseudo-classes whose argument is itself a selector list.
_SELECTOR_PSEUDOS = frozenset({
    "not", "is", "where", "has", "matches", "any", "-moz-any", "-webkit-any",
    "host", "host-context", "slotted",
})
_PSEUDO_CALL_RE = re.compile(r"::?([\w-]+)\((.*)\)$", re.DOTALL)


@dataclass(frozen=True)
class NamePart:
    """A class or id name and its offset within the selector text."""

    name: str
    offset: int

    @property
    def is_interpolated(self) -> bool:
        return "#{" in self.name


@dataclass(frozen=True)
class AttributeSelector:
    """An attribute selector such as ``[type="checkbox"]``.

    ``quote`` is the quote character used around the value, or None when
    the value is bare. ``offset`` points at the value when present, else
    at the attribute name.
    """

    name: str
    operator: str | None
    value: str | None
    quote: str | None
    offset: int


@dataclass(frozen=True)
class SelectorParts:
    classes: tuple[NamePart, ...] = ()
    ids: tuple[NamePart, ...] = ()
    attributes: tuple[AttributeSelector, ...] = ()


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a selector parse tree into a SelectorParts value."""

    def double_quoted(self, items: list[Token]) -> tuple[str, str, int]:
        return ('"', str(items[0])[1:-1], items[0].start_pos)

    def single_quoted(self, items: list[Token]) -> tuple[str, str, int]:
        return ("'", str(items[0])[1:-1], items[0].start_pos)

    def bare(self, items: list[Token]) -> tuple[None, str, int]:
        return (None, str(items[0]), items[0].start_pos)

    def attribute(self, items: list[object]) -> AttributeSelector:
        name_token = items[0]
        assert isinstance(name_token, Token)
        operator: str | None = None
        quote: str | None = None
        value: str | None = None
        offset = name_token.start_pos
        for item in items[1:]:
            if isinstance(item, Token) and item.type == "ATTR_OP":
                operator = str(item)
            elif isinstance(item, tuple):
                quote, value, offset = item
        return AttributeSelector(
            name=str(name_token), operator=operator, value=value, quote=quote, offset=offset
        )

    def start(self, items: list[object]) -> SelectorParts:
        classes: list[NamePart] = []
        ids: list[NamePart] = []
        attributes: list[AttributeSelector] = []
        for item in items:
            if isinstance(item, AttributeSelector):
                attributes.append(item)
            elif isinstance(item, Token) and item.type == "CLASS":
                classes.append(NamePart(name=str(item)[1:], offset=item.start_pos))
            elif isinstance(item, Token) and item.type == "ID":
                ids.append(NamePart(name=str(item)[1:], offset=item.start_pos))
            elif isinstance(item, Token) and item.type == "PSEUDO":
                for nested in _argument_parts(item):
                    classes.extend(nested.classes)
                    ids.extend(nested.ids)
                    attributes.extend(nested.attributes)
        return SelectorParts(classes=tuple(classes), ids=tuple(ids), attributes=tuple(attributes))


def _argument_parts(token: Token) -> list[SelectorParts]:
    """Analyze each selector in a pseudo-class argument list."""
    match = _PSEUDO_CALL_RE.match(str(token))
    if match is None or match.group(1).lower() not in _SELECTOR_PSEUDOS:
        return []
    argument = match.group(2)
    base = token.start_pos + match.start(2)
    bounds = [-1, *top_level_indices(argument, ","), len(argument)]
    found: list[SelectorParts] = []
    for a, b in zip(bounds, bounds[1:]):
        parts = analyze_selector(argument[a + 1 : b])
        if parts is not None:
            found.append(_shifted(parts, base + a + 1))
    return found


def _shifted(parts: SelectorParts, delta: int) -> SelectorParts:
    return SelectorParts(
        classes=tuple(replace(c, offset=c.offset + delta) for c in parts.classes),
        ids=tuple(replace(i, offset=i.offset + delta) for i in parts.ids),
        attributes=tuple(replace(a, offset=a.offset + delta) for a in parts.attributes),
    )


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="lalr")


@lru_cache(maxsize=4096)
def analyze_selector(text: str) -> SelectorParts | None:
    """Parse one selector; returns None when it cannot be analyzed."""
    try:
        tree = _parser().parse(text)
    except LarkError as exc:
        logger.debug("Selector %r not analyzed: %s", text, exc)
        return None
    return SelectorTransformer().transform(tree)
