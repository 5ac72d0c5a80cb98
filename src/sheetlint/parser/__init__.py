from sheetlint.parser.builder import PARSE_ERROR, ParseResult, parse
from sheetlint.parser.selectors import (
    AttributeSelector,
    NamePart,
    SelectorParts,
    analyze_selector,
)

__all__ = [
    "parse",
    "ParseResult",
    "PARSE_ERROR",
    "analyze_selector",
    "SelectorParts",
    "AttributeSelector",
    "NamePart",
]
