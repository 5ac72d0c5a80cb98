"""Tests for attribute quoting and class naming checks."""

from sheetlint.rules.selectors import check_attribute_selector_quoting, check_selector_naming


class TestCheckAttributeSelectorQuoting:
    def test_unquoted_value(self, run_check):
        findings = run_check(check_attribute_selector_quoting, "input[type=checkbox]{}")
        assert len(findings) == 1
        assert "'checkbox'" in findings[0].message
        assert findings[0].fix == 'Use [type="checkbox"].'
        assert (findings[0].line, findings[0].column) == (1, 12)

    def test_quoted_value(self, run_check):
        assert run_check(check_attribute_selector_quoting, 'input[type="checkbox"] {}') == []

    def test_presence_selector(self, run_check):
        assert run_check(check_attribute_selector_quoting, "input[disabled] {}") == []

    def test_second_selector_in_list(self, run_check):
        text = 'a[rel="x"],\na[rel=y] {}'
        findings = run_check(check_attribute_selector_quoting, text)
        assert [(f.line, f.column) for f in findings] == [(2, 7)]

    def test_fix_uses_preferred_quote(self, run_check):
        findings = run_check(
            check_attribute_selector_quoting, "a[rel=x] {}", quote_style="single"
        )
        assert findings[0].fix == "Use [rel='x']."

    def test_value_inside_negation(self, run_check):
        findings = run_check(check_attribute_selector_quoting, "a:not([href=x]) {\n  color: red;\n}\n")
        assert len(findings) == 1
        assert "'x' in '[href]'" in findings[0].message
        assert (findings[0].line, findings[0].column) == (1, 13)


class TestCheckSelectorNaming:
    def test_class_inside_is_argument(self, run_check):
        findings = run_check(check_selector_naming, "a:is(.ok, .notOk) {}")
        assert [f.message for f in findings] == [
            "Class name 'notOk' does not match the naming pattern."
        ]
        assert findings[0].column == 11

    def test_bem_names_pass(self, run_check):
        text = ".card {}\n\n.card__title {}\n\n.card--active {}\n\n.card__title--large {}\n"
        assert run_check(check_selector_naming, text) == []

    def test_camel_case_flagged(self, run_check):
        findings = run_check(check_selector_naming, ".navBar {}")
        assert len(findings) == 1
        assert findings[0].message == "Class name 'navBar' does not match the naming pattern."

    def test_underscore_words_flagged(self, run_check):
        assert len(run_check(check_selector_naming, ".nav_bar {}")) == 1

    def test_interpolated_names_skipped(self, run_check):
        assert run_check(check_selector_naming, ".icon-#{$name} {}") == []

    def test_custom_pattern(self, run_check):
        text = ".navBar {}"
        assert run_check(check_selector_naming, text, class_pattern=r"[a-z][A-Za-z]*") == []

    def test_keyframe_stops_are_not_selectors(self, run_check):
        text = "@keyframes spin {\n  from {}\n  to {}\n}\n"
        assert run_check(check_selector_naming, text) == []
