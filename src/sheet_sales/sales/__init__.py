"""Sales domain module.

This module provides functions to load sales data at different grains:

- **raw**: the published-CSV text (sheet_sales.sales.raw)
- **orders**: one canonical Order per sheet row (sheet_sales.sales.core)
- **grouped / daily**: customer groups and per-day stats (sheet_sales.sales.marts)

Example:
    >>> from sheet_sales import SheetConfig
    >>> from sheet_sales.sales import build_report, get_sales
    >>>
    >>> config = SheetConfig.from_env()
    >>> report = get_sales(config, "2024-07-01", "2024-07-31")
    >>> report.daily_stats[0]
    DailyStat(date='2024-07-01', order_count=4, revenue=1250000.0)
"""

from sheet_sales.sales.api import SalesReport, build_report, get_sales

__all__ = ["SalesReport", "build_report", "get_sales"]
