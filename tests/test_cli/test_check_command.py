"""Tests for the sheetlint command line."""

import json

import pytest
from click.testing import CliRunner

from sheetlint import __version__
from sheetlint.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(tmp_path):
    (tmp_path / "good.scss").write_text(".a {\n  color: #fff;\n}\n", encoding="utf-8")
    styles = tmp_path / "styles"
    styles.mkdir()
    (styles / "bad.css").write_text(".a{color:#FFFFFF}\n", encoding="utf-8")
    (styles / "notes.txt").write_text("not a stylesheet{", encoding="utf-8")
    return tmp_path


class TestCheckCommand:
    def test_clean_file_exits_zero(self, runner, project):
        result = runner.invoke(cli, ["check", str(project / "good.scss")])
        assert result.exit_code == 0
        assert "Summary: 0 error(s), 0 warning(s)" in result.output

    def test_findings_exit_one(self, runner, project):
        result = runner.invoke(cli, ["check", str(project / "styles" / "bad.css")])
        assert result.exit_code == 1
        assert "[warning] brace-spacing" in result.output
        assert "Summary: 0 error(s), 3 warning(s)" in result.output

    def test_directory_is_walked_for_stylesheets(self, runner, project):
        result = runner.invoke(cli, ["check", str(project)])
        assert result.exit_code == 1
        assert "bad.css:1:3" in result.output
        assert "notes.txt" not in result.output

    def test_error_threshold(self, runner, project):
        result = runner.invoke(
            cli, ["check", "--threshold", "error", str(project / "styles" / "bad.css")]
        )
        assert result.exit_code == 0
        assert "brace-spacing" in result.output

    def test_json_output(self, runner, project):
        result = runner.invoke(
            cli, ["check", "--format", "json", str(project / "styles" / "bad.css")]
        )
        data = json.loads(result.output)
        assert sorted(d["rule"] for d in data) == [
            "brace-spacing",
            "hex-color-case",
            "trailing-semicolon",
        ]

    def test_disable(self, runner, project):
        result = runner.invoke(
            cli,
            [
                "check",
                "--disable", "brace-spacing",
                "--disable", "hex-color-case",
                "--disable", "trailing-semicolon",
                str(project / "styles" / "bad.css"),
            ],
        )
        assert result.exit_code == 0

    def test_severity_override(self, runner, project):
        result = runner.invoke(
            cli,
            [
                "check",
                "--threshold", "error",
                "--severity", "hex-color-case=error",
                str(project / "styles" / "bad.css"),
            ],
        )
        assert result.exit_code == 1
        assert "[error] hex-color-case" in result.output

    def test_unknown_rule_is_a_usage_error(self, runner, project):
        result = runner.invoke(cli, ["check", "--disable", "nope", str(project / "good.scss")])
        assert result.exit_code == 2
        assert "Unknown rule(s): nope" in result.output

    def test_invalid_parameter_is_a_usage_error(self, runner, project):
        result = runner.invoke(cli, ["check", "--indent-width", "0", str(project / "good.scss")])
        assert result.exit_code == 2

    def test_indent_width_option(self, runner, tmp_path):
        path = tmp_path / "wide.css"
        path.write_text(".a {\n    color: #fff;\n}\n", encoding="utf-8")
        assert runner.invoke(cli, ["check", str(path)]).exit_code == 1
        assert runner.invoke(cli, ["check", "--indent-width", "4", str(path)]).exit_code == 0

    def test_missing_path(self, runner, tmp_path):
        result = runner.invoke(cli, ["check", str(tmp_path / "missing.css")])
        assert result.exit_code == 2


class TestOtherCommands:
    def test_rules_lists_every_check(self, runner):
        result = runner.invoke(cli, ["rules"])
        assert result.exit_code == 0
        assert "nesting-depth" in result.output
        assert "parse-error" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert __version__ in result.output
