"""Utility functions for costtrack."""

from costtrack.utils.date_parser import (
    parse_date,
    format_date,
    format_date_for_export,
    get_week_number,
)
from costtrack.utils.amount_parser import (
    parse_currency,
    format_currency,
    format_currency_for_export,
)

__all__ = [
    "parse_date",
    "format_date",
    "format_date_for_export",
    "get_week_number",
    "parse_currency",
    "format_currency",
    "format_currency_for_export",
]
