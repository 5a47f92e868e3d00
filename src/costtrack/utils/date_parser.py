"""Date parsing utilities for day-first ledger dates."""

from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

SPANISH_MONTH_ABBREVIATIONS = (
    "Ene",
    "Feb",
    "Mar",
    "Abr",
    "May",
    "Jun",
    "Jul",
    "Ago",
    "Sep",
    "Oct",
    "Nov",
    "Dic",
)


def parse_date(date_str: Optional[str]) -> Optional[date]:
    """Parse a ``D/M/YYYY`` date string into a date object.

    Dates are day-first ("19/3/2025" is March 19th). Zero-padded
    components ("05/03/2025") are accepted too.

    Args:
        date_str: Date string from the ledger

    Returns:
        Date object, or None if the string is not three integer components
        forming a valid calendar date
    """
    if not date_str:
        return None

    parts = str(date_str).strip().split("/")
    if len(parts) != 3:
        return None

    try:
        day, month, year = (int(part.strip()) for part in parts)
        return date(year, month, day)
    except ValueError:
        return None


def format_date(value: Optional[date]) -> str:
    """Format a date for display, e.g. ``19 Mar 2025``."""
    if value is None:
        return ""
    return f"{value.day} {SPANISH_MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"


def format_date_for_export(value: Optional[date]) -> str:
    """Format a date as zero-padded ``DD/MM/YYYY`` (inverse of parse_date)."""
    if value is None:
        return ""
    return f"{value.day:02d}/{value.month:02d}/{value.year}"


def get_week_number(value: date) -> int:
    """Return the ISO-8601 week number of a date.

    Week 1 is the week containing the year's first Thursday, so
    2024-12-31 is in week 1 and 2023-01-01 is in week 52.
    """
    return value.isocalendar()[1]


def get_period_filter(period: str, today: Optional[date] = None) -> tuple[int, Optional[int]]:
    """Get the year/month filter values for a named period.

    Args:
        period: One of this-month, last-month, this-year, last-year
        today: Reference date (defaults to date.today())

    Returns:
        Tuple of (year, month); month is None for whole-year periods

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        return (today.year, today.month)

    elif period == "last-month":
        last_month = today - relativedelta(months=1)
        return (last_month.year, last_month.month)

    elif period == "this-year":
        return (today.year, None)

    elif period == "last-year":
        return ((today - relativedelta(years=1)).year, None)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, last-month, this-year, last-year"
        )
