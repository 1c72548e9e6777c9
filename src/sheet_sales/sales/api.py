"""Public API for sales data.

This module provides the main entry points for turning orders into a
report, and for running the whole fetch -> parse -> aggregate pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from sheet_sales.sales.core import filter_by_date_range, parse_sales_csv
from sheet_sales.sales.marts import compute_totals, daily_stats, group_by_customer, top_customers
from sheet_sales.sales.raw import fetch_csv_text
from sheet_sales.types import DailyStat, Order, SalesTotals, TopCustomer

if TYPE_CHECKING:
    import requests

    from sheet_sales.config import SheetConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SalesReport:
    """Everything derived from one snapshot and one pair of filter bounds.

    Attributes:
        orders: Individual orders inside the date range, in sheet order.
        grouped: One merged record per customer, highest amount first.
        daily_stats: Per-day aggregates of ``orders``, oldest day first.
        top_customers: First five entries of ``grouped``.
        totals: Revenue, order count and average order value.
        start_date: Lower bound used, if any.
        end_date: Upper bound used, if any.

    """

    orders: Sequence[Order]
    grouped: list[Order]
    daily_stats: list[DailyStat]
    top_customers: list[TopCustomer]
    totals: SalesTotals
    start_date: date | str | None = None
    end_date: date | str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.orders


def build_report(
    orders: Sequence[Order],
    start_date: date | str | None = None,
    end_date: date | str | None = None,
) -> SalesReport:
    """Filter orders to a date range and compute every aggregate.

    Args:
        orders: Individual orders of the current snapshot.
        start_date: First day (inclusive), optional.
        end_date: Last day (inclusive), optional.

    Returns:
        SalesReport for the range.

    Examples:
        >>> report = build_report(orders, "2024-07-01", "2024-07-31")
        >>> report.totals.total_revenue

    """
    filtered = filter_by_date_range(orders, start_date, end_date)
    grouped = group_by_customer(filtered)
    stats = daily_stats(filtered)
    logger.debug(
        "Report for %s to %s: %d orders, %d customers, %d days",
        start_date or "-",
        end_date or "-",
        len(filtered),
        len(grouped),
        len(stats),
    )
    return SalesReport(
        orders=filtered,
        grouped=grouped,
        daily_stats=stats,
        top_customers=top_customers(grouped),
        totals=compute_totals(stats),
        start_date=start_date,
        end_date=end_date,
    )


def fetch_orders(
    config: SheetConfig,
    session: requests.Session | None = None,
) -> list[Order]:
    """Download the published sheet and parse it into Orders.

    Raises:
        FetchError: If the sheet cannot be downloaded.

    """
    text = fetch_csv_text(config, session=session)
    return parse_sales_csv(text, delimiter=config.delimiter)


def get_sales(
    config: SheetConfig,
    start_date: date | str | None = None,
    end_date: date | str | None = None,
    session: requests.Session | None = None,
) -> SalesReport:
    """Fetch the sheet and return the report for a date range.

    This function orchestrates the pipeline:
    1. Downloads the published CSV
    2. Parses rows into canonical Orders
    3. Filters, groups and aggregates

    Args:
        config: SheetConfig with the published-CSV URL.
        start_date: First day (date or YYYY-MM-DD), optional.
        end_date: Last day (date or YYYY-MM-DD), optional.
        session: Optional requests session (mainly for tests).

    Returns:
        SalesReport. An empty sheet gives an empty report, not an error.

    Raises:
        FetchError: If the sheet cannot be downloaded.
        ValueError: If a date bound is not in YYYY-MM-DD format.

    """
    orders = fetch_orders(config, session=session)
    return build_report(orders, start_date, end_date)
