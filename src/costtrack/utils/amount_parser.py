"""Amount parsing utilities for Guatemalan-formatted currency."""

import math
from typing import Any

CURRENCY_PREFIX = "Q"


def parse_currency(value: Any) -> float:
    """Parse a currency string into a float.

    Source ledgers use "." as thousands separator and "," as decimal
    separator:
    - "100.589,56" -> 100589.56
    - "1.500,00" -> 1500.0
    - "25,5" -> 25.5

    Numeric values (as produced by spreadsheet readers) are returned as-is.

    Args:
        value: Amount string or number

    Returns:
        Parsed amount, or 0.0 when the value is empty, not finite or cannot be parsed
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0

    text = str(value).strip()
    if not text:
        return 0.0

    # Thousands separators go, decimal comma becomes a dot
    cleaned = text.replace(".", "").replace(",", ".", 1)
    try:
        result = float(cleaned)
    except ValueError:
        return 0.0
    # float() accepts "nan" and "inf"
    return result if math.isfinite(result) else 0.0


def _group_thousands(amount: float, thousands: str, decimal: str) -> str:
    formatted = f"{amount:,.2f}"
    return formatted.replace(",", "\0").replace(".", decimal).replace("\0", thousands)


def format_currency(value: float) -> str:
    """Format an amount for display, e.g. ``Q 1,234.56``."""
    return f"{CURRENCY_PREFIX} {_group_thousands(value, ',', '.')}"


def format_currency_for_export(value: float) -> str:
    """Format an amount the way source ledgers write it, e.g. ``1.234,56``.

    This is the inverse of :func:`parse_currency`, so exported files
    re-import without losing cents.
    """
    return _group_thousands(value, ".", ",")
