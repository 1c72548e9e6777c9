"""Vietnamese money and date formatting helpers."""

from __future__ import annotations

from datetime import datetime


def format_vnd(amount: float) -> str:
    """Format an amount the vi-VN way: '.' thousands, no decimals, 'đ' suffix.

    Examples:
        >>> format_vnd(1234567)
        '1.234.567 đ'

    """
    return f"{amount:,.0f}".replace(",", ".") + " đ"


def format_day(value: datetime) -> str:
    """Format an instant as DD/MM/YYYY.

    Examples:
        >>> format_day(datetime(2024, 7, 21))
        '21/07/2024'

    """
    return value.strftime("%d/%m/%Y")
