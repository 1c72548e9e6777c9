"""Gold layer: customer groups, daily stats and derived totals.

This module aggregates individual Orders into the tables consumed by
reporting:

- **grouped orders**: one merged record per customer, sorted by revenue
- **daily stats**: one row per calendar day (quantity-weighted order count)
- **top customers**: the five biggest customer groups
- **totals**: revenue, order count and average order value
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

import pandas as pd

from sheet_sales.sales.core import orders_to_frame
from sheet_sales.types import DailyStat, Order, SalesTotals, TopCustomer

logger = logging.getLogger(__name__)

TOP_CUSTOMER_LIMIT = 5
DAILY_COLUMNS = ["date", "order_count", "revenue"]


def customer_key(name: str) -> str:
    """Grouping key for a customer name (trimmed, lower case)."""
    return name.strip().lower()


def _detail_line(details: str) -> str:
    return f"- {details}"


def seed_group(order: Order) -> Order:
    """Start a customer group from its oldest order."""
    return replace(
        order,
        details=_detail_line(order.details) if order.details else "",
        sub_orders=(order,),
    )


def merge_order(group: Order, order: Order) -> Order:
    """Fold one more (newer) order into a customer group.

    Pure: ``group`` is left untouched and a new record is returned.

    - amount and quantity are added
    - date and customer_name take the newer order's values
    - non-empty details are appended as a new "- ..." line
    - facebook_link is only filled while still empty
    - the order is appended to sub_orders
    """
    details = group.details
    if order.details:
        line = _detail_line(order.details)
        details = f"{details}\n{line}" if details else line

    return replace(
        group,
        amount=group.amount + order.amount,
        quantity=group.quantity + order.quantity,
        date=order.date,
        customer_name=order.customer_name,
        details=details,
        facebook_link=group.facebook_link or order.facebook_link,
        sub_orders=group.sub_orders + (order,),
    )


def group_by_customer(orders: Iterable[Order]) -> list[Order]:
    """Merge orders of the same customer into grouped records.

    Orders are processed oldest first (stable, so equal dates keep input
    order). Names are matched case- and whitespace-insensitively.

    Returns:
        Grouped orders sorted by amount, highest first. Groups with equal
        amounts keep the order in which their customers first appeared.

    """
    groups: dict[str, Order] = {}
    for order in sorted(orders, key=lambda o: o.date):
        key = customer_key(order.customer_name)
        current = groups.get(key)
        groups[key] = seed_group(order) if current is None else merge_order(current, order)

    result = sorted(groups.values(), key=lambda g: g.amount, reverse=True)
    logger.debug("Grouped orders into %d customers", len(result))
    return result


def daily_stats_frame(orders: Sequence[Order]) -> pd.DataFrame:
    """Aggregate individual orders into one row per calendar day.

    Returns:
        DataFrame with columns date (YYYY-MM-DD), order_count (sum of
        quantity) and revenue (sum of amount), sorted by date ascending.

    """
    if not orders:
        return pd.DataFrame(columns=DAILY_COLUMNS)

    df = orders_to_frame(orders)
    daily = (
        df.groupby("day", sort=True)
        .agg(order_count=("quantity", "sum"), revenue=("amount", "sum"))
        .reset_index()
        .rename(columns={"day": "date"})
    )
    return daily[DAILY_COLUMNS]


def daily_stats(orders: Sequence[Order]) -> list[DailyStat]:
    """Aggregate individual (not grouped) orders into DailyStat records."""
    daily = daily_stats_frame(orders)
    return [
        DailyStat(date=row.date, order_count=int(row.order_count), revenue=float(row.revenue))
        for row in daily.itertuples(index=False)
    ]


def top_customers(grouped: Sequence[Order], limit: int = TOP_CUSTOMER_LIMIT) -> list[TopCustomer]:
    """Project the first ``limit`` grouped orders (already sorted) to TopCustomer."""
    return [
        TopCustomer(
            name=g.customer_name,
            total_orders=g.quantity,
            total_revenue=g.amount,
            last_order_date=g.date,
        )
        for g in grouped[:limit]
    ]


def compute_totals(stats: Sequence[DailyStat]) -> SalesTotals:
    """Derive overall totals from daily stats."""
    total_revenue = sum(d.revenue for d in stats)
    total_orders = sum(d.order_count for d in stats)
    average = total_revenue / total_orders if total_orders > 0 else 0.0
    return SalesTotals(
        total_revenue=total_revenue,
        total_orders=total_orders,
        average_order_value=average,
    )
