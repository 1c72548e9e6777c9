"""Shared date utilities for the sales pipeline.

This module provides small helpers for calendar-day handling:

- Day parsing: standardized YYYY-MM-DD parsing for filter bounds
- Presets: the quick date ranges offered by the dashboard
- Durations: human-readable timings for log and console output

Examples:
    >>> from datetime import date
    >>> from sheet_sales.etl.utils import preset_range
    >>> preset_range("this_month", today=date(2024, 7, 21))
    (datetime.date(2024, 7, 1), datetime.date(2024, 7, 21))

"""

from __future__ import annotations

from datetime import date, datetime, timedelta

PRESETS = ("today", "yesterday", "this_month", "all")


def parse_day(s: str) -> date:
    """Parse a date string in YYYY-MM-DD format.

    Raises:
        ValueError: If the date string is not in YYYY-MM-DD format.

    Examples:
        >>> parse_day("2023-01-15")
        datetime.date(2023, 1, 15)

    """
    return datetime.strptime(s, "%Y-%m-%d").date()


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as a human-readable string.

    Examples:
        >>> format_duration(90.5)
        '1m 30.5s'
        >>> format_duration(45.2)
        '45.2s'

    """
    mins, secs = divmod(seconds, 60.0)
    if mins >= 1:
        return f"{int(mins)}m {secs:04.1f}s"
    else:
        return f"{secs:.1f}s"


def preset_range(name: str, today: date | None = None) -> tuple[date | None, date | None]:
    """Resolve a named quick filter to inclusive (start, end) days.

    Args:
        name: One of "today", "yesterday", "this_month" or "all".
        today: Reference day; defaults to the local current date.

    Returns:
        (start, end) tuple. "all" returns (None, None), meaning no bounds.

    Raises:
        ValueError: If ``name`` is not a known preset.

    Examples:
        >>> preset_range("yesterday", today=date(2024, 3, 1))
        (datetime.date(2024, 2, 29), datetime.date(2024, 2, 29))

    """
    ref = today or date.today()
    if name == "today":
        return ref, ref
    elif name == "yesterday":
        day = ref - timedelta(days=1)
        return day, day
    elif name == "this_month":
        return ref.replace(day=1), ref
    elif name == "all":
        return None, None
    raise ValueError(f"Invalid preset '{name}'. Must be one of: {', '.join(PRESETS)}.")
