"""Shared fixtures for the test suite."""

from pathlib import Path

import pytest

from sheetlint.config import LintConfig
from sheetlint.lexer import tokenize
from sheetlint.parser import parse

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def run_check():
    """Return a callable running one check over stylesheet text."""

    def _run(check, text, **config):
        tokens = tokenize(text)
        tree = parse(tokens).tree
        return check(tree, tokens, LintConfig(**config))

    return _run
