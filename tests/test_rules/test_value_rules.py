"""Tests for color, quote, unit, comma and function-name checks."""

import pytest

from sheetlint.rules.values import (
    check_comma_spacing,
    check_custom_function_namespace,
    check_hex_color_case,
    check_quote_style,
    check_zero_unit,
)


def _rule(body):
    return f".a {{\n  {body}\n}}\n"


# ---------------------------------------------------------------------------
# hex-color-case
# ---------------------------------------------------------------------------


class TestCheckHexColorCase:
    def test_uppercase_and_shortenable(self, run_check):
        findings = run_check(check_hex_color_case, _rule("color: #FFFFFF;"))
        assert len(findings) == 1
        assert findings[0].message == (
            "Hex color '#FFFFFF' uses uppercase letters and can be shortened to #fff."
        )
        assert findings[0].fix == "Use #fff."
        assert (findings[0].line, findings[0].column) == (2, 10)

    def test_lowercase_long_form(self, run_check):
        findings = run_check(check_hex_color_case, _rule("color: #aabbcc;"))
        assert findings[0].message == "Hex color '#aabbcc' can be shortened to #abc."

    def test_uppercase_not_shortenable(self, run_check):
        findings = run_check(check_hex_color_case, _rule("color: #A1B2C3;"))
        assert findings[0].message == "Hex color '#A1B2C3' uses uppercase letters."

    @pytest.mark.parametrize("value", ["#fff", "#a1b2c3", "#ffffff80", "red"])
    def test_preferred_forms(self, run_check, value):
        assert run_check(check_hex_color_case, _rule(f"color: {value};")) == []

    def test_several_colors_in_one_value(self, run_check):
        findings = run_check(check_hex_color_case, _rule("background: linear-gradient(#FFF, #000000);"))
        assert len(findings) == 2

    def test_ids_in_urls_and_strings_are_ignored(self, run_check):
        text = _rule('background: url(#FFFFFF); content: "#ABCDEF";')
        assert run_check(check_hex_color_case, text) == []

    def test_selector_ids_are_ignored(self, run_check):
        assert run_check(check_hex_color_case, "#BADGE {\n  color: red;\n}\n") == []

    def test_variable_values(self, run_check):
        assert len(run_check(check_hex_color_case, "$brand: #AABBCC;\n")) == 1

    def test_extend_targets_are_selectors(self, run_check):
        assert run_check(check_hex_color_case, _rule("@extend #ABCDEF;")) == []


# ---------------------------------------------------------------------------
# quote-style
# ---------------------------------------------------------------------------


class TestCheckQuoteStyle:
    def test_single_quotes_flagged(self, run_check):
        findings = run_check(check_quote_style, _rule("content: 'x';"))
        assert len(findings) == 1
        assert findings[0].fix == 'Use "x".'
        assert (findings[0].line, findings[0].column) == (2, 12)

    def test_double_quotes_pass(self, run_check):
        assert run_check(check_quote_style, _rule('content: "x";')) == []

    def test_embedded_preferred_quote_is_allowed(self, run_check):
        assert run_check(check_quote_style, _rule("content: 'say \"hi\"';")) == []

    def test_single_quote_preference(self, run_check):
        findings = run_check(check_quote_style, _rule('content: "x";'), quote_style="single")
        assert findings[0].fix == "Use 'x'."

    def test_import_statement(self, run_check):
        assert len(run_check(check_quote_style, "@import 'base';\n")) == 1

    def test_attribute_selector_value(self, run_check):
        findings = run_check(check_quote_style, "a[href^='http'] {\n}\n")
        assert len(findings) == 1
        assert findings[0].column == 9

    def test_unquoted_attribute_is_not_a_quote_style_issue(self, run_check):
        assert run_check(check_quote_style, "input[type=text] {\n}\n") == []


# ---------------------------------------------------------------------------
# zero-unit
# ---------------------------------------------------------------------------


class TestCheckZeroUnit:
    @pytest.mark.parametrize("value", ["0px", "0em", "0.0rem", "0PX"])
    def test_zero_with_unit(self, run_check, value):
        findings = run_check(check_zero_unit, _rule(f"margin: {value};"))
        assert len(findings) == 1
        assert findings[0].fix == "Use 0."

    @pytest.mark.parametrize(
        "value",
        ["0", "10px", "0.5em", "100px", "0s", "0%", "1.0px", "calc(100% - 0px)", "#00px"],
    )
    def test_values_that_pass(self, run_check, value):
        assert run_check(check_zero_unit, _rule(f"margin: {value};")) == []

    def test_position_of_each_zero(self, run_check):
        findings = run_check(check_zero_unit, _rule("margin: 0px 1px 0em;"))
        assert [(f.line, f.column) for f in findings] == [(2, 11), (2, 19)]

    def test_custom_properties_are_skipped(self, run_check):
        assert run_check(check_zero_unit, _rule("--gap: 0px;")) == []


# ---------------------------------------------------------------------------
# comma-spacing
# ---------------------------------------------------------------------------


class TestCheckCommaSpacing:
    def test_missing_space(self, run_check):
        findings = run_check(check_comma_spacing, _rule("color: rgba(0,0,0,0.5);"))
        assert len(findings) == 3
        assert findings[0].column == 16

    def test_double_space(self, run_check):
        assert len(run_check(check_comma_spacing, _rule("font-family: a,  b;"))) == 1

    def test_single_space_passes(self, run_check):
        assert run_check(check_comma_spacing, _rule("color: rgba(0, 0, 0, 0.5);")) == []

    def test_comma_at_line_end_passes(self, run_check):
        text = ".a {\n  transition:\n    color 1s,\n    opacity 1s;\n}\n"
        assert run_check(check_comma_spacing, text) == []

    def test_commas_in_strings_ignored(self, run_check):
        assert run_check(check_comma_spacing, _rule('content: "a,b";')) == []

    def test_include_arguments(self, run_check):
        assert len(run_check(check_comma_spacing, _rule("@include size(1px,2px);"))) == 1


# ---------------------------------------------------------------------------
# custom-function-namespace
# ---------------------------------------------------------------------------


class TestCheckCustomFunctionNamespace:
    def test_inert_without_namespace(self, run_check):
        assert run_check(check_custom_function_namespace, _rule("width: rem(10);")) == []

    def test_unprefixed_call(self, run_check):
        findings = run_check(
            check_custom_function_namespace, _rule("width: to-rem(10);"), function_namespace="ns-"
        )
        assert len(findings) == 1
        assert findings[0].message == "Call to custom function 'to-rem' is not prefixed with 'ns-'."
        assert findings[0].column == 10

    def test_prefixed_call(self, run_check):
        text = _rule("width: ns-rem(10);")
        assert run_check(check_custom_function_namespace, text, function_namespace="ns-") == []

    def test_builtin_functions_are_allowed(self, run_check):
        text = _rule("color: rgba(darken($c, 10%), 0.5); width: calc(100% - var(--x));")
        assert run_check(check_custom_function_namespace, text, function_namespace="ns-") == []

    @pytest.mark.parametrize(
        "value", ["sin(45deg)", "pow(2, 3)", "mod(10px, 3px)", "saturation($c)"]
    )
    def test_math_and_color_builtins(self, run_check, value):
        text = _rule(f"width: {value};")
        assert run_check(check_custom_function_namespace, text, function_namespace="ns-") == []

    def test_unprefixed_definition(self, run_check):
        text = "@function rem($px) {\n  @return $px / 16px;\n}\n"
        findings = run_check(check_custom_function_namespace, text, function_namespace="ns-")
        assert [f.message for f in findings] == [
            "Custom function 'rem' is not prefixed with 'ns-'."
        ]
        assert findings[0].column == 11

    def test_mixin_names_are_not_calls(self, run_check):
        text = _rule("@include button-size(10px);")
        assert run_check(check_custom_function_namespace, text, function_namespace="ns-") == []
