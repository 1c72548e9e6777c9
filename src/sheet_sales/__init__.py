"""sheet_sales - sales reporting from a published spreadsheet.

This package turns a spreadsheet's published-CSV export into canonical
orders and the aggregates used for reporting:

- **Raw (bronze)**: the CSV text downloaded from the sheet
- **Core (silver)**: one normalized Order per sheet row
- **Marts (gold)**: customer groups, daily stats, top customers, totals

Module Structure:
    sheet_sales.etl: Line splitting, field normalizers, column mapping
    sheet_sales.sales: Fetch (raw), parse/filter (core), aggregate (marts)
    sheet_sales.dashboard: In-memory snapshot and periodic refresh
    sheet_sales.insights: Optional AI summary of daily stats
    sheet_sales.config: SheetConfig configuration

Quick Start:
    >>> from sheet_sales import SheetConfig
    >>> from sheet_sales.sales import get_sales
    >>>
    >>> config = SheetConfig(csv_url="https://docs.google.com/.../pub?output=csv")
    >>> report = get_sales(config, "2024-07-01", "2024-07-31")
    >>> report.totals.total_revenue
    >>> [c.name for c in report.top_customers]
"""

__version__ = "0.1.0"

from sheet_sales.config import SheetConfig
from sheet_sales.exceptions import (
    ConfigError,
    ETLError,
    ExtractionError,
    FetchError,
    NoDataError,
    SheetSalesError,
)
from sheet_sales.types import DailyStat, Order, SalesTotals, TopCustomer

__all__ = [
    "ConfigError",
    "DailyStat",
    "ETLError",
    "ExtractionError",
    "FetchError",
    "NoDataError",
    "Order",
    "SalesTotals",
    "SheetConfig",
    "SheetSalesError",
    "TopCustomer",
    "__version__",
]
