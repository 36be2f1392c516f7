from __future__ import annotations

import logging
import math
import numbers
from datetime import date, datetime, timedelta
from typing import Any

import numpy as np

"""Cell value formatting shared by sampling, transformation and analysis.

Spreadsheet serial date handling:
- Only applied when the column name hints at a date/time AND does not hint
  at a numeric domain (age, amount, quantity, ...).
- Range check: 0 < n < 100000, and whole numbers must lie in [1, 50000].
- Epoch day is 1899-12-30, which absorbs the 1900 leap-year quirk of the
  spreadsheet ecosystem for every serial after Feb 1900.

The boundaries are kept as-is for compatibility with existing callers.
"""

__all__ = [
    "SERIAL_EPOCH",
    "DATE_HINT_KEYWORDS",
    "NUMERIC_HINT_KEYWORDS",
    "format_value",
    "format_date",
    "format_number",
    "is_serial_date",
    "is_date_column_hint",
    "serial_to_date_string",
]

logger = logging.getLogger(__name__)

SERIAL_EPOCH = date(1899, 12, 30)

DATE_HINT_KEYWORDS = ("date", "time", "timestamp")
NUMERIC_HINT_KEYWORDS = (
    "age", "amount", "quantity", "price", "cost", "qty", "count", "number", "units", "total",
)


def format_date(value: date) -> str:
    """M/D/YYYY without zero padding."""
    return f"{value.month}/{value.day}/{value.year}"


def format_number(value: numbers.Real) -> str:
    """Text form of a number; integral floats lose their '.0'."""
    if isinstance(value, numbers.Integral):
        return str(int(value))
    f = float(value)
    if math.isfinite(f) and f.is_integer():
        return str(int(f))
    return str(f)


def is_serial_date(num: float) -> bool:
    return 0 < num < 100000 and (num % 1 != 0 or 1 <= num <= 50000)


def is_date_column_hint(column_hint: str) -> bool:
    """True when the hint names a date/time column and no numeric domain."""
    hint = (column_hint or "").lower()
    if not any(k in hint for k in DATE_HINT_KEYWORDS):
        return False
    return not any(k in hint for k in NUMERIC_HINT_KEYWORDS)


def serial_to_date_string(serial: float) -> str:
    """Convert a spreadsheet day serial to M/D/YYYY (time fraction dropped)."""
    day = SERIAL_EPOCH + timedelta(days=math.floor(serial))
    return format_date(day)


def _is_missing(value: Any) -> bool:
    # NaN / NaT compare unequal to themselves
    if isinstance(value, (float, np.floating, datetime)):
        try:
            return bool(value != value)
        except (TypeError, ValueError):
            return False
    return False


def format_value(value: Any, column_hint: str = "") -> str:
    """Format a raw cell as text.

    Parameters
    ----------
    value: raw cell (str, number, bool, date/datetime, None)
    column_hint: source column name; drives serial date conversion
    """
    if value is None or _is_missing(value):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return format_date(value)
    if isinstance(value, numbers.Real):
        if is_date_column_hint(column_hint) and is_serial_date(float(value)):
            try:
                return serial_to_date_string(float(value))
            except (OverflowError, ValueError) as e:
                logger.warning(f"serial date conversion failed for {value!r} ({column_hint}): {e}")
                return format_number(value)
        return format_number(value)
    return str(value)
