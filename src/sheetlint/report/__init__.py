"""Report assembly and rendering."""

from sheetlint.report.reporter import (
    Report,
    finding_to_dict,
    format_finding,
    render_json,
    render_text,
    report,
)

__all__ = ["Report", "report", "render_text", "render_json", "format_finding", "finding_to_dict"]
