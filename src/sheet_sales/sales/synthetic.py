"""Synthetic demo orders used when the published sheet is unavailable."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone

import numpy as np

from sheet_sales.types import Order

logger = logging.getLogger(__name__)

DEFAULT_DAYS = 30
MAX_ORDERS_PER_DAY = 5
MIN_AMOUNT = 100_000
AMOUNT_SPAN = 500_000
MAX_QUANTITY = 3
DEMO_DETAILS = "Combo 2 áo thun, size L, màu đen. Giao hàng giờ hành chính."
DEMO_LINK = "https://facebook.com"


def generate_orders(
    days: int = DEFAULT_DAYS,
    today: date | None = None,
    seed: int | None = None,
) -> list[Order]:
    """Generate randomized orders for the last ``days`` days.

    Each day gets 1-5 orders from customers "Nguyễn Văn A", "Nguyễn Văn B",
    ... with amounts in [100000, 600000) and quantities 1-3, so the output
    satisfies the same invariants as parsed sheet data.

    Args:
        days: Number of days back from ``today`` (inclusive of today).
        today: Reference day, defaults to the current UTC date.
        seed: Optional seed for reproducible output.

    Returns:
        Orders, newest day first.

    Raises:
        ValueError: If days is negative.

    """
    if days < 0:
        raise ValueError(f"days must be >= 0, got {days}")

    rng = np.random.default_rng(seed)
    ref = today or datetime.now(timezone.utc).date()
    orders: list[Order] = []

    for i in range(days):
        day = datetime.combine(ref - timedelta(days=i), time(12, 0), tzinfo=timezone.utc)
        per_day = int(rng.integers(1, MAX_ORDERS_PER_DAY + 1))
        for j in range(per_day):
            orders.append(
                Order(
                    id=f"mock-{i}-{j}",
                    date=day,
                    amount=float(rng.integers(MIN_AMOUNT, MIN_AMOUNT + AMOUNT_SPAN)),
                    quantity=int(rng.integers(1, MAX_QUANTITY + 1)),
                    customer_name=f"Nguyễn Văn {chr(ord('A') + j)}",
                    details=DEMO_DETAILS,
                    facebook_link=DEMO_LINK,
                )
            )

    logger.info("Generated %d synthetic orders over %d days", len(orders), days)
    return orders
