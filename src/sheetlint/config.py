"""Lint configuration: rule selection and rule parameters."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import Any, Iterable, Mapping

from sheetlint.model.finding import Severity

# Block, optional __element, optional --modifier; lowercase, hyphen-delimited words.
BEM_PATTERN = (
    r"^[a-z0-9]+(?:-[a-z0-9]+)*"
    r"(?:__[a-z0-9]+(?:-[a-z0-9]+)*)?"
    r"(?:--[a-z0-9]+(?:-[a-z0-9]+)*)?$"
)

QUOTE_STYLES = ("double", "single")


class ConfigError(Exception):
    """Raised when the configuration is invalid. Fatal before any file is linted."""


@dataclass(frozen=True)
class LintConfig:
    enabled: frozenset[str] | None = None  # allow-list; None means every rule
    disabled: frozenset[str] = frozenset()
    severities: Mapping[str, Severity] = field(default_factory=dict)
    indent_width: int = 2
    quote_style: str = "double"
    max_nesting_depth: int = 1
    max_nesting_span: int = 20
    compact_max_declarations: int = 3
    blank_lines_between_rules: int = 1
    heading_blank_lines_before: int = 1
    heading_blank_lines_after: int | None = None  # None leaves the gap below unchecked
    function_namespace: str | None = None
    class_pattern: str = BEM_PATTERN

    def __post_init__(self) -> None:
        if self.indent_width < 1:
            raise ConfigError(f"indent_width must be at least 1, got {self.indent_width}")
        if self.quote_style not in QUOTE_STYLES:
            raise ConfigError(
                f"quote_style must be one of {', '.join(QUOTE_STYLES)}, got {self.quote_style!r}"
            )
        for name in (
            "max_nesting_depth",
            "max_nesting_span",
            "compact_max_declarations",
            "blank_lines_between_rules",
            "heading_blank_lines_before",
            "heading_blank_lines_after",
        ):
            value = getattr(self, name)
            if value is None and name == "heading_blank_lines_after":
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")
        if self.function_namespace is not None and not self.function_namespace.strip():
            raise ConfigError("function_namespace must not be empty")
        try:
            re.compile(self.class_pattern)
        except re.error as exc:
            raise ConfigError(f"class_pattern is not a valid regular expression: {exc}") from exc
        for rule, severity in self.severities.items():
            if not isinstance(severity, Severity):
                raise ConfigError(f"Severity for rule '{rule}' must be a Severity, got {severity!r}")

    @property
    def class_regex(self) -> re.Pattern[str]:
        return re.compile(self.class_pattern)

    @property
    def preferred_quote(self) -> str:
        return '"' if self.quote_style == "double" else "'"

    def is_enabled(self, rule: str) -> bool:
        if rule in self.disabled:
            return False
        return self.enabled is None or rule in self.enabled

    def severity_for(self, rule: str, default: Severity) -> Severity:
        return self.severities.get(rule, default)

    def check_rule_names(self, known: Iterable[str]) -> None:
        """Raise :class:`ConfigError` if any referenced rule id is unknown."""
        known_ids = set(known)
        referenced = set(self.disabled) | set(self.severities) | set(self.enabled or ())
        unknown = sorted(referenced - known_ids)
        if unknown:
            raise ConfigError(f"Unknown rule(s): {', '.join(unknown)}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LintConfig:
        """Build a config from plain data, as produced by an external loader.

        Keys use the field names; rule lists may be any iterable of rule
        ids and severities may be given as strings.
        """
        allowed = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

        kwargs: dict[str, Any] = dict(data)
        if kwargs.get("enabled") is not None:
            kwargs["enabled"] = _rule_set(kwargs["enabled"], "enabled")
        if "disabled" in kwargs:
            kwargs["disabled"] = _rule_set(kwargs["disabled"], "disabled")
        if "severities" in kwargs:
            kwargs["severities"] = {
                str(rule): _coerce_severity(rule, value)
                for rule, value in dict(kwargs["severities"]).items()
            }
        for name in (
            "indent_width",
            "max_nesting_depth",
            "max_nesting_span",
            "compact_max_declarations",
            "blank_lines_between_rules",
            "heading_blank_lines_before",
            "heading_blank_lines_after",
        ):
            if name in kwargs and kwargs[name] is not None and not isinstance(kwargs[name], int):
                try:
                    kwargs[name] = int(kwargs[name])
                except (TypeError, ValueError) as exc:
                    raise ConfigError(f"{name} must be an integer, got {kwargs[name]!r}") from exc
        return cls(**kwargs)


def _rule_set(value: Any, key: str) -> frozenset[str]:
    if isinstance(value, str):
        raise ConfigError(f"{key} must be a list of rule ids, not a string")
    try:
        return frozenset(str(v) for v in value)
    except TypeError as exc:
        raise ConfigError(f"{key} must be a list of rule ids") from exc


def _coerce_severity(rule: str, value: Any) -> Severity:
    if isinstance(value, Severity):
        return value
    try:
        return Severity(str(value).lower())
    except ValueError as exc:
        raise ConfigError(f"Invalid severity {value!r} for rule '{rule}'") from exc


DEFAULT_CONFIG = LintConfig()
