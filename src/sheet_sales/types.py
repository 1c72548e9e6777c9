"""Shared types for sales records and their aggregates."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime


def format_instant(value: datetime) -> str:
    """Format a UTC datetime as an ISO-8601 instant with millisecond precision.

    Examples:
        >>> from datetime import timezone
        >>> format_instant(datetime(2024, 7, 21, tzinfo=timezone.utc))
        '2024-07-21T00:00:00.000Z'

    """
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class Order:
    """One canonical sales record.

    An individual order has an empty ``sub_orders``. A grouped order (one
    customer's orders merged together) carries its constituent orders in
    ``sub_orders``, oldest first, and its amount, quantity, date, details and
    facebook_link are derived from them.

    Attributes:
        id: Stable identifier, e.g. "row-3".
        date: Order instant, timezone-aware UTC.
        amount: Non-negative order value.
        quantity: Positive number of items/orders, defaults to 1.
        customer_name: Display name of the customer.
        details: Free-text note, possibly multi-line.
        facebook_link: Customer profile URL, or "".
        original_data: Verbatim header -> raw value mapping of the sheet row.
        sub_orders: Orders merged into this record.

    """

    id: str
    date: datetime
    amount: float
    quantity: int = 1
    customer_name: str = ""
    details: str = ""
    facebook_link: str = ""
    original_data: Mapping[str, str] = field(default_factory=dict, compare=False)
    sub_orders: tuple[Order, ...] = ()

    @property
    def iso_date(self) -> str:
        return format_instant(self.date)

    @property
    def day(self) -> str:
        """Calendar-day key (YYYY-MM-DD)."""
        return self.date.date().isoformat()


@dataclass(frozen=True)
class DailyStat:
    """Per-day aggregate over individual orders.

    Attributes:
        date: Calendar day, YYYY-MM-DD.
        order_count: Sum of quantity (not the number of distinct orders).
        revenue: Sum of amount.

    """

    date: str
    order_count: int
    revenue: float


@dataclass(frozen=True)
class TopCustomer:
    name: str
    total_orders: int
    total_revenue: float
    last_order_date: datetime


@dataclass(frozen=True)
class SalesTotals:
    total_revenue: float
    total_orders: int
    average_order_value: float
