"""Display formatting for notification text."""

from datetime import date
from decimal import Decimal
from typing import Union

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_gbp(amount: Union[Decimal, float, int, None]) -> str:
    """Whole pounds with thousands separators, e.g. £44,000,000."""
    return f"£{float(amount or 0):,.0f}"


def format_short_date(value: date) -> str:
    """Day, short month and year, e.g. 08 Jul 2025."""
    return f"{value.day:02d} {_MONTHS[value.month - 1]} {value.year}"
