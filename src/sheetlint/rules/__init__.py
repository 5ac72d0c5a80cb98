"""Rule checks and the registry that orders them.

``ALL_RULES`` maps each rule id to its check function. Iteration order is
the order in which the engine runs the checks.
"""

from sheetlint.rules.base import RuleFunc
from sheetlint.rules.layout import (
    check_compact_form_eligibility,
    check_one_declaration_per_line,
    check_one_selector_per_line,
    check_trailing_semicolon,
)
from sheetlint.rules.nesting import (
    check_extend_position,
    check_include_position,
    check_nesting_depth,
    check_nesting_span,
)
from sheetlint.rules.selectors import check_attribute_selector_quoting, check_selector_naming
from sheetlint.rules.values import (
    check_comma_spacing,
    check_custom_function_namespace,
    check_hex_color_case,
    check_quote_style,
    check_zero_unit,
)
from sheetlint.rules.whitespace import (
    check_blank_line_between_rules,
    check_brace_spacing,
    check_closing_brace_alignment,
    check_heading_comment_spacing,
    check_indentation_consistency,
    check_trailing_whitespace,
)

ALL_RULES: dict[str, RuleFunc] = {
    "indentation-consistency": check_indentation_consistency,
    "one-selector-per-line": check_one_selector_per_line,
    "brace-spacing": check_brace_spacing,
    "one-declaration-per-line": check_one_declaration_per_line,
    "compact-form-eligibility": check_compact_form_eligibility,
    "hex-color-case": check_hex_color_case,
    "quote-style": check_quote_style,
    "attribute-selector-quoting": check_attribute_selector_quoting,
    "zero-unit": check_zero_unit,
    "comma-spacing": check_comma_spacing,
    "trailing-semicolon": check_trailing_semicolon,
    "closing-brace-alignment": check_closing_brace_alignment,
    "blank-line-between-rules": check_blank_line_between_rules,
    "nesting-depth": check_nesting_depth,
    "nesting-span": check_nesting_span,
    "extend-position": check_extend_position,
    "include-position": check_include_position,
    "custom-function-namespace": check_custom_function_namespace,
    # Additional house-style checks.
    "selector-naming": check_selector_naming,
    "heading-comment-spacing": check_heading_comment_spacing,
    "trailing-whitespace": check_trailing_whitespace,
}

__all__ = ["ALL_RULES", "RuleFunc"]
