"""Output formatting utilities."""

from sheet_sales.formatters.console import format_report_for_console
from sheet_sales.formatters.currency import format_vnd

__all__ = ["format_report_for_console", "format_vnd"]
