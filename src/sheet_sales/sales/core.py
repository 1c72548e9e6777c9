"""Silver layer: canonical orders built from published-sheet text.

This module turns the raw CSV body into Order records (one per data row)
and provides the inclusive date-range filter applied before aggregation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone

import pandas as pd

from sheet_sales.etl import column_mapping as cols
from sheet_sales.etl.parsing import parse_currency, parse_date, parse_quantity, split_line
from sheet_sales.etl.utils import parse_day
from sheet_sales.types import Order

logger = logging.getLogger(__name__)

EARLIEST = datetime.min.replace(tzinfo=timezone.utc)
LATEST = datetime.max.replace(tzinfo=timezone.utc)
END_OF_DAY = time(23, 59, 59, 999000)

CELL_FIELDS = ("date", "customer_name", "quantity", "amount", "details", "facebook_link")

FRAME_COLUMNS = [
    "id",
    "date",
    "day",
    "amount",
    "quantity",
    "customer_name",
    "details",
    "facebook_link",
]


@dataclass(frozen=True)
class SheetRow:
    """One data row of the sheet, mapped onto canonical fields.

    Every field is optional in the sheet; absent columns or blank cells come
    through as "". Defaults for the canonical Order are applied in
    build_order():

    - date: current time when blank or unparsable
    - amount: 0
    - quantity: 1
    - customer_name: "Customer {n}"
    - details, facebook_link: ""

    Cell values are validated on construction: each canonical field must be
    a string, and every original_data key and value must be one too.
    """

    date: str = ""
    customer_name: str = ""
    quantity: str = ""
    amount: str = ""
    details: str = ""
    facebook_link: str = ""
    original_data: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in CELL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"SheetRow.{name} must be str, got {type(value).__name__}")
        for key, value in self.original_data.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError(
                    f"SheetRow.original_data must map str to str, got {key!r}: {value!r}"
                )

    @classmethod
    def from_values(
        cls,
        headers: Sequence[str],
        values: Sequence[str],
        columns: Mapping[str, int | None] | None = None,
    ) -> SheetRow:
        """Build a SheetRow from lower-cased headers and one row's values.

        Args:
            headers: Lower-cased header strings.
            values: Split row values. Missing trailing cells read as "";
                values beyond the last header are logged and ignored.
            columns: Pre-computed result of column_mapping.map_columns();
                computed from ``headers`` when omitted.

        """
        if columns is None:
            columns = cols.map_columns(headers)
        if len(values) > len(headers):
            logger.debug(
                "Row has %d values for %d headers, extra values ignored: %r",
                len(values),
                len(headers),
                list(values[len(headers) :]),
            )
        original = {h: cols.cell_value(values, i) for i, h in enumerate(headers)}
        return cls(
            date=cols.cell_value(values, columns[cols.DATE]),
            customer_name=cols.cell_value(values, columns[cols.CUSTOMER_NAME]),
            quantity=cols.cell_value(values, columns[cols.QUANTITY]),
            amount=cols.cell_value(values, columns[cols.AMOUNT]),
            details=cols.cell_value(values, columns[cols.DETAILS]),
            facebook_link=cols.cell_value(values, columns[cols.FACEBOOK_LINK]),
            original_data=original,
        )


def build_order(row: SheetRow, index: int, now: datetime | None = None) -> Order:
    """Normalize one SheetRow into an Order.

    Args:
        row: Mapped sheet row.
        index: 0-based position among the data rows; drives the id and the
            placeholder customer name.
        now: Fallback instant for unparsable dates.

    """
    return Order(
        id=f"row-{index}",
        date=parse_date(row.date, now=now),
        amount=parse_currency(row.amount),
        quantity=parse_quantity(row.quantity),
        customer_name=row.customer_name or f"Customer {index + 1}",
        details=row.details or "",
        facebook_link=row.facebook_link or "",
        original_data=dict(row.original_data),
    )


def parse_sales_csv(text: str, delimiter: str = ",", now: datetime | None = None) -> list[Order]:
    """Parse a published-sheet body into Orders.

    The first non-blank line is the header; each later non-blank line is
    one order. Lines are split on '\\n' only, so quoted cells cannot span
    lines.

    Args:
        text: CSV body as returned by the endpoint.
        delimiter: Field delimiter.
        now: Fallback instant for unparsable dates.

    Returns:
        Orders in sheet order. A sheet with fewer than two non-blank lines
        yields an empty list.

    """
    lines = [line for line in text.split("\n") if line.strip()]
    if len(lines) < 2:
        logger.info("Sheet has no data rows")
        return []

    headers = cols.normalize_headers(split_line(lines[0], delimiter))
    columns = cols.map_columns(headers)
    unmapped = [name for name, idx in columns.items() if idx is None]
    if unmapped:
        logger.warning("No sheet column found for: %s", ", ".join(unmapped))

    orders = [
        build_order(SheetRow.from_values(headers, split_line(line, delimiter), columns), i, now)
        for i, line in enumerate(lines[1:])
    ]
    logger.info("Parsed %d orders from sheet", len(orders))
    return orders


def filter_by_date_range(
    orders: Sequence[Order],
    start_date: date | str | None = None,
    end_date: date | str | None = None,
) -> Sequence[Order]:
    """Select orders whose date falls inside an inclusive day range.

    The range is [start 00:00:00.000, end 23:59:59.999] in UTC. Blank
    strings count as missing bounds; a missing start means "since the
    beginning", a missing end means "until the end".

    Args:
        orders: Orders to filter.
        start_date: First day (date or YYYY-MM-DD), optional.
        end_date: Last day (date or YYYY-MM-DD), optional.

    Returns:
        The input itself when both bounds are missing, otherwise a new list
        preserving input order.

    Raises:
        ValueError: If a bound string is not in YYYY-MM-DD format.

    """
    start = _as_day(start_date)
    end = _as_day(end_date)
    if start is None and end is None:
        return orders

    lower = datetime.combine(start, time.min, tzinfo=timezone.utc) if start else EARLIEST
    upper = datetime.combine(end, END_OF_DAY, tzinfo=timezone.utc) if end else LATEST
    return [o for o in orders if lower <= o.date <= upper]


def _as_day(value: date | str | None) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_day(value)


def orders_to_frame(orders: Sequence[Order]) -> pd.DataFrame:
    """Return individual orders as a DataFrame (one row per order)."""
    if not orders:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.DataFrame(
        [
            {
                "id": o.id,
                "date": o.date,
                "day": o.day,
                "amount": o.amount,
                "quantity": o.quantity,
                "customer_name": o.customer_name,
                "details": o.details,
                "facebook_link": o.facebook_link,
            }
            for o in orders
        ],
        columns=FRAME_COLUMNS,
    )
