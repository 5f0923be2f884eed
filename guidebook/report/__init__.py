"""
Report module.

Generates dated Markdown reports of lint results and the catalog.
"""

from guidebook.report.generator import (
    ReportGenerator,
    ReportConfig,
    ReportResult,
    generate_report,
    generate_report_content,
)

__all__ = [
    "ReportGenerator",
    "ReportConfig",
    "ReportResult",
    "generate_report",
    "generate_report_content",
]
