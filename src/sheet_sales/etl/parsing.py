"""Shared utilities for parsing published-sheet text.

This module provides the low-level functions used when turning exported
spreadsheet text into canonical values. Every normalizer is tolerant of
malformed input and degrades to a safe default instead of raising.

Key utilities:
- Line splitting: quote-aware delimited-text splitting
- Number parsing: locale-ambiguous currency amounts and quantities
- Date parsing: day/month/year first, generic parsing as fallback

Examples:
    >>> from sheet_sales.etl.parsing import split_line, parse_currency
    >>> split_line('a,"b,c",d')
    ['a', 'b,c', 'd']
    >>> parse_currency("1.234,56")
    1234.56
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

import pandas as pd

logger = logging.getLogger(__name__)

QUOTE = '"'

# Keep digits and both separator candidates
_CURRENCY_RE = re.compile(r"[^\d.,]")
_NON_DIGIT_RE = re.compile(r"\D")

# D/M/YYYY, D.M.YYYY or D-M-YYYY, anything after the year (a time) is ignored
_DMY_RE = re.compile(r"(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{4})")


def split_line(line: str, delimiter: str = ",") -> list[str]:
    """Split one line of delimited text into trimmed field values.

    A double quote toggles the quoted state; while quoted the delimiter is
    kept as literal text. Quote characters themselves are dropped, and
    escaped quotes (``""``) are not supported.

    Args:
        line: Raw text line (without its line terminator).
        delimiter: Single-character field separator.

    Returns:
        Ordered list of field values.

    Examples:
        >>> split_line('a,"b,c",d')
        ['a', 'b,c', 'd']
        >>> split_line(' x ,, y')
        ['x', '', 'y']

    """
    fields: list[str] = []
    current: list[str] = []
    in_quote = False
    for ch in line:
        if ch == QUOTE:
            in_quote = not in_quote
        elif ch == delimiter and not in_quote:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return [_clean_field(f) for f in fields]


def _clean_field(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value.startswith(QUOTE) and value.endswith(QUOTE):
        value = value[1:-1]
    return value.strip()


def parse_currency(value: str | None) -> float:
    """Parse a locale-formatted money amount.

    Separator rules:
    - only '.' present: thousands separators, e.g. '1.234.567' -> 1234567
    - only ',' present: thousands separators, e.g. '1,234,567' -> 1234567
    - both present: European style, '.' is thousands and the last ','
      is the decimal mark, e.g. '1.234,56' -> 1234.56. Earlier commas
      are dropped rather than read as decimal points, so '1,234.567,5'
      gives 1234567.5, not 1.234.

    Anything that is not a digit or separator (currency symbols, signs,
    spaces) is discarded, so the result is never negative.

    Args:
        value: Raw cell text.

    Returns:
        Parsed amount, or 0.0 when nothing usable remains.

    Examples:
        >>> parse_currency("350.000 đ")
        350000.0
        >>> parse_currency("")
        0.0

    """
    if not value:
        return 0.0
    s = _CURRENCY_RE.sub("", value)
    if not s:
        return 0.0

    has_dot = "." in s
    has_com = "," in s

    if has_dot and has_com:
        s = s.replace(".", "")
        whole, _, frac = s.rpartition(",")
        s = f"{whole.replace(',', '')}.{frac}"
    elif has_dot:
        s = s.replace(".", "")
    elif has_com:
        s = s.replace(",", "")

    try:
        return float(s)
    except ValueError:
        logger.debug("Unparsable amount %r, using 0", value)
        return 0.0


def parse_quantity(value: str | None) -> int:
    """Parse an order quantity, defaulting to 1.

    All non-digit characters are removed ('5 cái' -> 5). Empty,
    non-numeric and zero results fall back to 1.

    Examples:
        >>> parse_quantity("5 cái")
        5
        >>> parse_quantity("abc")
        1

    """
    if not value:
        return 1
    digits = _NON_DIGIT_RE.sub("", value)
    if not digits:
        return 1
    return int(digits) or 1


def parse_date(value: str | None, now: datetime | None = None) -> datetime:
    """Parse a sheet timestamp into a timezone-aware UTC datetime.

    Day/month/year text (Vietnamese sheets: '21/07/2024 14:30:00') is tried
    first and always read day-first; the time part is ignored. When that
    does not produce a valid date the whole string goes through
    ``pandas.to_datetime``, which reads ambiguous dates month-first
    ('07/08/2024' is July 8th there). If both fail, ``now`` is returned.

    Args:
        value: Raw cell text.
        now: Fallback instant; defaults to the current UTC time.

    Returns:
        UTC datetime. This function never raises.

    Examples:
        >>> parse_date("21/07/2024").date()
        datetime.date(2024, 7, 21)

    """
    fallback = now or datetime.now(timezone.utc)
    if not value or not value.strip():
        return fallback

    m = _DMY_RE.search(value)
    if m:
        day, month, year = (int(g) for g in m.groups())
        try:
            return datetime(year, month, day, tzinfo=timezone.utc)
        except ValueError:
            logger.debug("Invalid day/month/year in %r, trying generic parsing", value)

    try:
        ts = pd.to_datetime(value.strip(), utc=True)
    except (ValueError, TypeError, OverflowError):
        logger.debug("Unparsable date %r, using current time", value)
        return fallback
    if pd.isna(ts):
        return fallback
    return ts.to_pydatetime()
