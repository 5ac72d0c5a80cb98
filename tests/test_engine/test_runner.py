"""Tests for per-file and multi-file linting."""

import threading

import pytest

from sheetlint.config import ConfigError, LintConfig
from sheetlint.engine import IO_ERROR, Linter, lint_file, lint_paths


@pytest.fixture
def stylesheets(tmp_path):
    good = tmp_path / "good.css"
    good.write_text(".a {\n  color: #fff;\n}\n", encoding="utf-8")
    bad = tmp_path / "bad.css"
    bad.write_text(".a{color:#FFFFFF}\n", encoding="utf-8")
    broken = tmp_path / "broken.css"
    broken.write_bytes(b".a { content: \"\xff\xfe\"; }\n")
    return good, bad, broken


class TestLintFile:
    def test_clean_file(self, stylesheets):
        good, _, _ = stylesheets
        assert lint_file(good) == []

    def test_findings_carry_the_path(self, stylesheets):
        _, bad, _ = stylesheets
        findings = lint_file(bad)
        assert len(findings) == 3
        assert {f.path for f in findings} == {str(bad)}

    def test_undecodable_file(self, stylesheets, caplog):
        _, _, broken = stylesheets
        findings = lint_file(broken)
        assert len(findings) == 1
        assert findings[0].rule == IO_ERROR
        assert findings[0].is_error
        assert findings[0].position is None
        assert findings[0].path == str(broken)
        assert "Cannot read" in caplog.text

    def test_missing_file(self, tmp_path):
        findings = lint_file(tmp_path / "missing.css")
        assert [f.rule for f in findings] == [IO_ERROR]


class TestLintPaths:
    def test_results_follow_input_order(self, stylesheets):
        good, bad, broken = stylesheets
        findings = lint_paths([broken, good, bad], max_workers=3)
        assert findings[0].rule == IO_ERROR
        assert [f.path for f in findings[1:]] == [str(bad)] * 3

    def test_undecodable_file_does_not_stop_the_run(self, stylesheets):
        good, bad, broken = stylesheets
        findings = lint_paths([bad, broken, good])
        paths = [f.path for f in findings]
        assert paths.count(str(bad)) == 3
        assert paths.count(str(broken)) == 1

    def test_empty(self):
        assert lint_paths([]) == []

    def test_cancelled_run_skips_files(self, stylesheets):
        cancel = threading.Event()
        cancel.set()
        assert lint_paths(list(stylesheets), cancel=cancel) == []


class TestLinter:
    def test_unknown_rule_is_fatal_at_construction(self):
        with pytest.raises(ConfigError, match="Unknown rule"):
            Linter(LintConfig(disabled=frozenset({"no-such-rule"})))

    def test_uses_its_config(self, stylesheets):
        _, bad, _ = stylesheets
        linter = Linter(LintConfig(disabled=frozenset({"hex-color-case"})))
        rules = sorted(f.rule for f in linter.lint_file(bad))
        assert rules == ["brace-spacing", "trailing-semicolon"]

    def test_lint_paths(self, stylesheets):
        good, bad, _ = stylesheets
        assert len(Linter().lint_paths([good, bad])) == 3

    def test_lint_text(self):
        assert Linter().lint_text(".a {\n  color: #fff;\n}\n") == []
