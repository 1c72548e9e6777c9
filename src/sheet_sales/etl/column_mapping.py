"""Heuristic mapping of human-authored sheet headers onto canonical fields.

Headers in the published sheet are typed by people, mostly in Vietnamese
("Thời Gian", "Tên Khách", "Tổng Tiền", ...), so columns are located by
keyword containment rather than exact names.

Matching rules:
    - headers are compared lower-cased
    - the first header (left to right) containing any keyword of a field wins
    - a later header matching the same field is ignored, even when it would
      be a better fit ("total amount" vs "deposit amount")
"""

from __future__ import annotations

from collections.abc import Sequence

DATE = "date"
CUSTOMER_NAME = "customer_name"
QUANTITY = "quantity"
AMOUNT = "amount"
DETAILS = "details"
FACEBOOK_LINK = "facebook_link"

# Canonical field -> keywords, in priority order
FIELD_KEYWORDS: dict[str, tuple[str, ...]] = {
    DATE: ("thời gian", "ngày", "time", "date"),
    CUSTOMER_NAME: ("tên khách", "khách hàng", "name"),
    QUANTITY: ("số đơn", "số lượng", "quantity"),
    AMOUNT: ("tổng tiền", "doanh thu", "amount", "thành tiền"),
    DETAILS: ("chi tiết", "nội dung", "comment", "product"),
    FACEBOOK_LINK: ("link facebook", "facebook", "fb"),
}


def normalize_headers(headers: Sequence[str]) -> list[str]:
    """Lower-case header strings for keyword matching."""
    return [h.lower() for h in headers]


def find_column(headers: Sequence[str], keywords: Sequence[str]) -> int | None:
    """Return the index of the first header containing any keyword.

    Args:
        headers: Lower-cased header strings.
        keywords: Keywords to look for (substring match).

    Returns:
        Column index, or None when no header matches.

    Examples:
        >>> find_column(["stt", "tên khách hàng", "name"], ("tên khách", "name"))
        1

    """
    for i, header in enumerate(headers):
        if any(k in header for k in keywords):
            return i
    return None


def map_columns(headers: Sequence[str]) -> dict[str, int | None]:
    """Resolve every canonical field to a column index (or None)."""
    return {field: find_column(headers, keywords) for field, keywords in FIELD_KEYWORDS.items()}


def find_value(headers: Sequence[str], values: Sequence[str], field: str) -> str:
    """Return the raw value for a canonical field from one row.

    Args:
        headers: Lower-cased header strings.
        values: Row values aligned with ``headers``.
        field: Canonical field name (key of FIELD_KEYWORDS).

    Returns:
        The matching cell text, or "" when no header matches or the row
        is shorter than the header.

    Raises:
        KeyError: If ``field`` is not a canonical field.

    """
    idx = find_column(headers, FIELD_KEYWORDS[field])
    return cell_value(values, idx)


def cell_value(values: Sequence[str], idx: int | None) -> str:
    """Return ``values[idx]``, or "" for a missing column or short row."""
    if idx is None or idx >= len(values):
        return ""
    return values[idx]
