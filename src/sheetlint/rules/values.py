"""Value rules: colors, quotes, units, commas and function names."""

from __future__ import annotations

import re
from typing import Iterator, Sequence

from sheetlint.config import LintConfig
from sheetlint.model.finding import Finding, Severity
from sheetlint.model.nodes import AtStatementNode, DeclarationNode, RuleNode, StylesheetNode
from sheetlint.model.token import Position, Token
from sheetlint.parser.selectors import analyze_selector
from sheetlint.rules.base import (
    iter_selector_rules,
    iter_strings,
    iter_value_texts,
    mask_value,
    position_at,
)

# ---------------------------------------------------------------------------
# Patterns and known value sets
# ---------------------------------------------------------------------------

_HEX_RE = re.compile(r"(?<![\w&#-])#([0-9a-fA-F]{3,8})(?![\w-])")

_LENGTH_UNITS = "px|em|rem|ex|ch|vw|vh|vmin|vmax|vi|vb|cm|mm|q|in|pt|pc"
_ZERO_RE = re.compile(
    rf"(?<![\w.#$-])(?:0+(?:\.0*)?|\.0+)({_LENGTH_UNITS})(?![\w%-])", re.IGNORECASE
)

# Functions whose arguments must keep units on zero lengths.
_UNIT_PRESERVING = frozenset({"calc", "clamp", "min", "max"})

_FUNCTION_RE = re.compile(r"(?<![\w$.%-])(-?[A-Za-z_][\w-]*)\(")

CSS_FUNCTIONS = frozenset({
    "attr", "blur", "brightness", "calc", "circle", "clamp", "color", "color-mix",
    "conic-gradient", "contrast", "counter", "counters", "cross-fade", "cubic-bezier",
    "drop-shadow", "element", "ellipse", "env", "fit-content", "format", "grayscale",
    "hsl", "hsla", "hue-rotate", "hwb", "image", "image-set", "inset", "invert", "lab",
    "lch", "linear-gradient", "local", "matrix", "matrix3d", "max", "min", "minmax",
    "oklab", "oklch", "opacity", "path", "perspective", "polygon", "radial-gradient",
    "rect", "repeat", "repeating-conic-gradient", "repeating-linear-gradient",
    "repeating-radial-gradient", "rgb", "rgba", "rotate", "rotate3d", "rotatex",
    "rotatey", "rotatez", "saturate", "scale", "scale3d", "scalex", "scaley", "scalez",
    "selector", "sepia", "skew", "skewx", "skewy", "steps", "supports", "symbols",
    "translate", "translate3d", "translatex", "translatey", "translatez", "url", "var",
    "layer", "xywh",
    "abs", "acos", "asin", "atan", "atan2", "cos", "exp", "hypot", "log", "mod", "pow",
    "rem", "round", "sign", "sin", "sqrt", "tan",
})

SASS_FUNCTIONS = frozenset({
    "abs", "adjust-color", "adjust-hue", "alpha", "append", "blue", "call", "ceil",
    "change-color", "comparable", "complement", "content-exists", "darken",
    "desaturate", "fade-in", "fade-out", "feature-exists", "floor", "function-exists",
    "get-function", "global-variable-exists", "green", "hue", "ie-hex-str", "if",
    "index", "inspect", "invert", "is-bracketed", "is-superselector", "join",
    "keywords", "length", "lighten", "lightness", "list-separator", "map-get",
    "map-has-key", "map-keys", "map-merge", "map-remove", "map-values", "mix",
    "mixin-exists", "nth", "opacify", "percentage", "quote", "random", "red",
    "round", "saturation", "scale-color", "selector-append", "selector-extend",
    "selector-nest", "selector-parse", "selector-replace", "selector-unify", "set-nth",
    "simple-selectors", "str-index", "str-insert", "str-length", "str-slice",
    "to-lower-case", "to-upper-case", "transparentize", "type-of", "unique-id",
    "unit", "unitless", "unquote", "variable-exists", "zip",
})

_KNOWN_FUNCTIONS = CSS_FUNCTIONS | SASS_FUNCTIONS

# At-rules whose first identifier names a mixin or function rather than calling one.
_NAMING_AT_RULES = frozenset({"include", "mixin", "function"})
_LEADING_NAME_RE = re.compile(r"\s*[\w-]+")


def _preferred_hex(digits: str) -> str:
    lowered = digits.lower()
    if len(lowered) in (6, 8) and all(
        lowered[i] == lowered[i + 1] for i in range(0, len(lowered), 2)
    ):
        lowered = lowered[::2]
    return "#" + lowered


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def check_hex_color_case(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Hex colors are lowercase and use the shorthand form when one exists."""
    findings: list[Finding] = []
    # @extend names a selector, where #abc is an id.
    for text, start in iter_value_texts(tree, skip=frozenset({"extend"})):
        masked = mask_value(text)
        for match in _HEX_RE.finditer(masked):
            digits = match.group(1)
            if len(digits) not in (3, 4, 6, 8):
                continue
            preferred = _preferred_hex(digits)
            if preferred == "#" + digits:
                continue
            problems = []
            if digits != digits.lower():
                problems.append("uses uppercase letters")
            if len(preferred) - 1 < len(digits):
                problems.append(f"can be shortened to {preferred}")
            findings.append(
                Finding(
                    rule="hex-color-case",
                    severity=Severity.WARNING,
                    message=f"Hex color '#{digits}' {' and '.join(problems)}.",
                    position=position_at(start, text, match.start()),
                    fix=f"Use {preferred}.",
                )
            )
    return findings


def check_quote_style(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Strings and attribute selector values use the preferred quote character."""
    preferred = config.preferred_quote
    findings: list[Finding] = []

    def flag(position: Position, quote: str, content: str) -> None:
        # A string holding the preferred quote may keep the other one.
        if quote == preferred or preferred in content:
            return
        findings.append(
            Finding(
                rule="quote-style",
                severity=Severity.WARNING,
                message=f"String {quote}{content}{quote} should use {config.quote_style} quotes.",
                position=position,
                fix=f"Use {preferred}{content}{preferred}.",
            )
        )

    for text, start in iter_value_texts(tree):
        for offset, quote, content in iter_strings(text):
            flag(position_at(start, text, offset), quote, content)

    for rule in iter_selector_rules(tree):
        for selector in rule.selectors:
            parts = analyze_selector(selector.text)
            if parts is None:
                continue
            for attribute in parts.attributes:
                if attribute.quote is not None and attribute.value is not None:
                    flag(
                        position_at(selector.start, selector.text, attribute.offset),
                        attribute.quote,
                        attribute.value,
                    )
    return findings


def _unit_preserving_spans(masked: str) -> list[tuple[int, int]]:
    """Spans of calc()-like function arguments, where zero units are required."""
    spans: list[tuple[int, int]] = []
    for match in _FUNCTION_RE.finditer(masked):
        if match.group(1).lower() not in _UNIT_PRESERVING:
            continue
        depth = 0
        for index in range(match.end() - 1, len(masked)):
            if masked[index] == "(":
                depth += 1
            elif masked[index] == ")":
                depth -= 1
                if depth == 0:
                    spans.append((match.end(), index))
                    break
        else:
            spans.append((match.end(), len(masked)))
    return spans


def check_zero_unit(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Zero lengths are written without a unit."""
    findings: list[Finding] = []
    for node, _ in tree.walk():
        if not isinstance(node, DeclarationNode) or node.value_start is None:
            continue
        if node.is_custom_property:
            continue
        masked = mask_value(node.value)
        protected = _unit_preserving_spans(masked)
        for match in _ZERO_RE.finditer(masked):
            if any(a <= match.start() < b for a, b in protected):
                continue
            findings.append(
                Finding(
                    rule="zero-unit",
                    severity=Severity.WARNING,
                    message=f"Unit is unnecessary on zero value '{match.group()}' in '{node.property}'.",
                    position=position_at(node.value_start, node.value, match.start()),
                    fix="Use 0.",
                )
            )
    return findings


def _comma_texts(tree: StylesheetNode) -> Iterator[tuple[str, Position]]:
    for node, _ in tree.walk():
        if isinstance(node, DeclarationNode) and node.value_start is not None:
            yield node.value, node.value_start
        elif isinstance(node, AtStatementNode) and node.params_start is not None:
            yield node.params, node.params_start


def check_comma_spacing(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Commas in values and function arguments are followed by exactly one space."""
    findings: list[Finding] = []
    for text, start in _comma_texts(tree):
        masked = mask_value(text)
        for index, ch in enumerate(masked):
            if ch != ",":
                continue
            after = masked[index + 1 : index + 3]
            if after[:1] in ("", "\n", "\r", ")"):
                continue
            if after[:1] == " " and after[1:2] not in (" ", "\t"):
                continue
            findings.append(
                Finding(
                    rule="comma-spacing",
                    severity=Severity.WARNING,
                    message="Expected exactly one space after ','.",
                    position=position_at(start, text, index),
                    fix="Follow the comma with a single space.",
                )
            )
    return findings


def _call_texts(tree: StylesheetNode) -> Iterator[tuple[str, Position]]:
    """Value texts to scan for function calls, with mixin/function names blanked."""
    for node, _ in tree.walk():
        if isinstance(node, DeclarationNode) and node.value_start is not None:
            yield node.value, node.value_start
            continue
        if isinstance(node, AtStatementNode) and node.params_start is not None:
            keyword, text, start = node.keyword, node.params, node.params_start
        elif isinstance(node, RuleNode) and node.prelude_start is not None:
            keyword, text, start = node.at_keyword or "", node.prelude, node.prelude_start
        else:
            continue
        if keyword in _NAMING_AT_RULES:
            match = _LEADING_NAME_RE.match(text)
            if match:
                text = " " * match.end() + text[match.end() :]
        yield text, start


def check_custom_function_namespace(
    tree: StylesheetNode, tokens: Sequence[Token], config: LintConfig
) -> list[Finding]:
    """Custom functions are defined and called with the configured namespace prefix."""
    namespace = config.function_namespace
    if namespace is None:
        return []
    findings: list[Finding] = []

    for rule, _ in tree.iter_rules():
        if rule.at_keyword != "function" or rule.prelude_start is None:
            continue
        match = _LEADING_NAME_RE.match(rule.prelude)
        name = match.group().strip() if match else ""
        if name and not name.startswith(namespace):
            findings.append(
                Finding(
                    rule="custom-function-namespace",
                    severity=Severity.WARNING,
                    message=f"Custom function '{name}' is not prefixed with '{namespace}'.",
                    position=position_at(rule.prelude_start, rule.prelude, len(match.group()) - len(name)),
                    fix=f"Rename it to '{namespace}{name}'.",
                )
            )

    for text, start in _call_texts(tree):
        masked = mask_value(text)
        for match in _FUNCTION_RE.finditer(masked):
            name = match.group(1)
            lowered = name.lower()
            if lowered in _KNOWN_FUNCTIONS or name.startswith("-") or name.startswith(namespace):
                continue
            findings.append(
                Finding(
                    rule="custom-function-namespace",
                    severity=Severity.WARNING,
                    message=f"Call to custom function '{name}' is not prefixed with '{namespace}'.",
                    position=position_at(start, text, match.start(1)),
                    fix=f"Call '{namespace}{name}' instead.",
                )
            )
    return findings
