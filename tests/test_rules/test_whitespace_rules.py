"""Tests for indentation, brace and blank-line checks."""

from sheetlint.rules.whitespace import (
    check_blank_line_between_rules,
    check_brace_spacing,
    check_closing_brace_alignment,
    check_heading_comment_spacing,
    check_indentation_consistency,
    check_trailing_whitespace,
)


# ---------------------------------------------------------------------------
# indentation-consistency
# ---------------------------------------------------------------------------


class TestCheckIndentationConsistency:
    def test_two_space_indentation_passes(self, run_check):
        text = ".a {\n  color: red;\n  .b {\n    color: blue;\n  }\n}\n"
        assert run_check(check_indentation_consistency, text) == []

    def test_tab_indentation(self, run_check):
        findings = run_check(check_indentation_consistency, ".a {\n\tcolor: red;\n}")
        assert len(findings) == 1
        assert "tabs" in findings[0].message
        assert findings[0].line == 2

    def test_mixed_tabs_and_spaces(self, run_check):
        findings = run_check(check_indentation_consistency, ".a {\n \tcolor: red;\n}")
        assert [f.message for f in findings] == ["Indentation mixes tabs and spaces."]

    def test_four_space_indentation(self, run_check):
        findings = run_check(check_indentation_consistency, ".a {\n    color: red;\n}")
        assert len(findings) == 1
        assert findings[0].message == "Expected indentation of 2 spaces, found 4."

    def test_odd_indentation(self, run_check):
        findings = run_check(check_indentation_consistency, ".a {\n   color: red;\n}")
        assert "not a multiple of 2" in findings[0].message

    def test_configured_width(self, run_check):
        text = ".a {\n    color: red;\n}"
        assert run_check(check_indentation_consistency, text, indent_width=4) == []

    def test_closing_brace_dedents(self, run_check):
        findings = run_check(check_indentation_consistency, ".a {\n  color: red;\n  }")
        assert len(findings) == 1
        assert findings[0].line == 3

    def test_continuation_lines_may_indent_further(self, run_check):
        text = ".a {\n  transition:\n    color 1s,\n    opacity 1s;\n}"
        assert run_check(check_indentation_consistency, text) == []

    def test_selector_list_lines_are_not_continuations(self, run_check):
        findings = run_check(check_indentation_consistency, ".a,\n  .b {\n}")
        assert len(findings) == 1
        assert findings[0].line == 2


class TestCheckTrailingWhitespace:
    def test_trailing_spaces(self, run_check):
        findings = run_check(check_trailing_whitespace, ".a {  \n  color: red;\t\n}")
        assert [f.line for f in findings] == [1, 2]

    def test_clean(self, run_check):
        assert run_check(check_trailing_whitespace, ".a {\n  color: red;\n}\n") == []

    def test_whitespace_only_line(self, run_check):
        findings = run_check(check_trailing_whitespace, ".a {}\n  \n.b {}")
        assert [f.line for f in findings] == [2]


# ---------------------------------------------------------------------------
# brace-spacing
# ---------------------------------------------------------------------------


class TestCheckBraceSpacing:
    def test_missing_space(self, run_check):
        findings = run_check(check_brace_spacing, ".a{color: red;}")
        assert len(findings) == 1
        assert findings[0].message == "Missing space before '{'."
        assert (findings[0].line, findings[0].column) == (1, 3)

    def test_double_space(self, run_check):
        findings = run_check(check_brace_spacing, ".a  {}")
        assert "single space" in findings[0].message

    def test_brace_on_next_line(self, run_check):
        findings = run_check(check_brace_spacing, ".a\n{\n}")
        assert findings[0].message.startswith("Opening brace should be on the same line")

    def test_single_space_passes(self, run_check):
        assert run_check(check_brace_spacing, ".a {\n  .b {}\n}") == []


class TestCheckClosingBraceAlignment:
    def test_aligned(self, run_check):
        text = ".a {\n  .b {\n    color: red;\n  }\n}"
        assert run_check(check_closing_brace_alignment, text) == []

    def test_misaligned(self, run_check):
        findings = run_check(check_closing_brace_alignment, ".a {\n  color: red;\n  }")
        assert len(findings) == 1
        assert (findings[0].line, findings[0].column) == (3, 3)

    def test_single_line_block_is_exempt(self, run_check):
        assert run_check(check_closing_brace_alignment, "  .a { color: red; }") == []

    def test_unclosed_block_is_skipped(self, run_check):
        assert run_check(check_closing_brace_alignment, ".a {\n  color: red;\n") == []

    def test_else_chain_aligns_with_if(self, run_check):
        text = "@if $a {\n  color: red;\n} @else {\n  color: blue;\n}\n"
        assert run_check(check_closing_brace_alignment, text) == []

    def test_nested_else_chain_aligns_with_if(self, run_check):
        text = ".a {\n  @if $a {\n    color: red;\n  } @else {\n    color: blue;\n  }\n}\n"
        assert run_check(check_closing_brace_alignment, text) == []

    def test_else_chain_misaligned_brace(self, run_check):
        text = "@if $a {\n  color: red;\n} @else {\n  color: blue;\n  }\n"
        findings = run_check(check_closing_brace_alignment, text)
        assert len(findings) == 1
        assert (findings[0].line, findings[0].column) == (5, 3)
        assert "'@if $a' at column 1" in findings[0].message


# ---------------------------------------------------------------------------
# blank-line-between-rules
# ---------------------------------------------------------------------------


class TestCheckBlankLineBetweenRules:
    def test_one_blank_line_passes(self, run_check):
        text = ".a {\n  color: red;\n}\n\n.b {\n  color: blue;\n}\n"
        assert run_check(check_blank_line_between_rules, text) == []

    def test_no_blank_line(self, run_check):
        findings = run_check(check_blank_line_between_rules, ".a {\n}\n.b {\n}\n")
        assert len(findings) == 1
        assert findings[0].message == "Expected 1 blank line(s) between rules, found 0."
        assert findings[0].line == 3

    def test_two_blank_lines(self, run_check):
        findings = run_check(check_blank_line_between_rules, ".a {}\n\n\n.b {}\n")
        assert "found 2" in findings[0].message

    def test_measured_above_attached_comment(self, run_check):
        text = ".a {}\n\n// Second\n.b {}\n"
        assert run_check(check_blank_line_between_rules, text) == []

    def test_nested_rules_are_not_checked(self, run_check):
        text = ".a {\n  .b {}\n  .c {}\n}\n"
        assert run_check(check_blank_line_between_rules, text) == []

    def test_configured_count(self, run_check):
        text = ".a {}\n\n.b {}\n"
        findings = run_check(check_blank_line_between_rules, text, blank_lines_between_rules=2)
        assert len(findings) == 1

    def test_comment_after_closing_brace(self, run_check):
        text = ".a {\n  color: red;\n} // end a\n\n.b {\n  color: red;\n}\n"
        assert run_check(check_blank_line_between_rules, text) == []

    def test_comment_after_closing_brace_without_gap(self, run_check):
        text = ".a {\n  color: red;\n} // end a\n.b {\n  color: red;\n}\n"
        findings = run_check(check_blank_line_between_rules, text)
        assert len(findings) == 1
        assert findings[0].line == 4

    def test_else_continues_the_if(self, run_check):
        text = "@if $a {\n  color: red;\n} @else {\n  color: blue;\n}\n\n.b {}\n"
        assert run_check(check_blank_line_between_rules, text) == []


class TestCheckHeadingCommentSpacing:
    def test_comment_at_top_of_file(self, run_check):
        assert run_check(check_heading_comment_spacing, "/* Header */\n.a {}\n") == []

    def test_comment_needs_room_above(self, run_check):
        findings = run_check(check_heading_comment_spacing, ".a {}\n/* Next */\n.b {}\n")
        assert len(findings) == 1
        assert findings[0].line == 2

    def test_comment_with_room_above(self, run_check):
        assert run_check(check_heading_comment_spacing, ".a {}\n\n/* Next */\n.b {}\n") == []

    def test_configured_spacing_above(self, run_check):
        text = ".a {}\n\n/* Next */\n.b {}\n"
        findings = run_check(check_heading_comment_spacing, text, heading_blank_lines_before=2)
        assert len(findings) == 1

    def test_gap_below_unchecked_by_default(self, run_check):
        text = "/* Section */\n\n\n.a {}\n"
        assert run_check(check_heading_comment_spacing, text) == []

    def test_configured_gap_below(self, run_check):
        text = "/* Section */\n.a {}\n"
        findings = run_check(check_heading_comment_spacing, text, heading_blank_lines_after=1)
        assert len(findings) == 1
        assert "below heading comment, found 0" in findings[0].message

    def test_same_line_comment_is_not_a_heading(self, run_check):
        assert run_check(check_heading_comment_spacing, ".a {} /* note */\n") == []

    def test_comment_on_declaration_is_not_a_heading(self, run_check):
        assert run_check(check_heading_comment_spacing, "$a: 1;\n// note\n$b: 2;\n") == []

    def test_stacked_comments(self, run_check):
        text = ".a {}\n\n/* a */\n/* b */\n.x {\n}\n"
        assert run_check(check_heading_comment_spacing, text) == []

    def test_unattached_comment_still_needs_room(self, run_check):
        findings = run_check(check_heading_comment_spacing, "$a: 1;\n/* Section */\n\n\n.b {}\n")
        assert len(findings) == 1
        assert findings[0].line == 2
