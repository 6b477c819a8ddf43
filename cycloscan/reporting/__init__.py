from cycloscan.reporting.formatters import format_json, format_text, get_formatter
from cycloscan.reporting.report import DEFAULT_REPORT_PATH, ReportWriter, format_report, report_path_for

__all__ = [
    "DEFAULT_REPORT_PATH",
    "ReportWriter",
    "format_json",
    "format_report",
    "format_text",
    "get_formatter",
    "report_path_for",
]
