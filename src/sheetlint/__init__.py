"""Sheetlint - style-conformance linter for CSS and SCSS stylesheets."""

__version__ = "0.1.0"
