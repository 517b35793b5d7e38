"""Design system utilities — value and date formatting functions.

Implements the display rules used across the report pages:
- Numbers: en-US grouping, up to three decimals (12,345 / 1,234.5)
- Totals: numbers, with "-" for an empty (zero) total
- Currency: BWP 12,345
- Dates: "September 5, 2024" (long) and "September 2024" (month)
"""

import calendar
import math
from datetime import date, datetime


_NA = "N/A"
_DASH = "-"


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and (math.isnan(value) or math.isinf(value)))


def format_number(value: float | int | None) -> str:
    """Format a number with comma separators and at most three decimals."""
    if _is_missing(value):
        return _NA
    if float(value) == int(value):
        return f"{int(value):,}"
    formatted = f"{value:,.3f}".rstrip("0").rstrip(".")
    return formatted


def format_total(value: float | int | None) -> str:
    """Format an aggregate total; a zero or missing total shows as "-"."""
    if _is_missing(value) or value == 0:
        return _DASH
    return format_number(value)


def format_currency(value: float | int | None, currency: str = "BWP") -> str:
    """Format an AVE amount as ``BWP 12,345``."""
    if _is_missing(value):
        return _NA
    return f"{currency} {format_number(value)}"


def format_long_date(value: date | datetime) -> str:
    """Format a date as ``September 5, 2024``."""
    return f"{calendar.month_name[value.month]} {value.day}, {value.year}"


def format_month_year(value: date | datetime) -> str:
    """Format a date as ``September 2024``."""
    return f"{calendar.month_name[value.month]} {value.year}"


def sentiment_color(value: float | None, positive: str = "#10B981",
                    negative: str = "#EF4444", neutral: str = "#9CA3AF") -> str:
    """Return the color hex for a sentiment score's sign."""
    if _is_missing(value):
        return neutral
    if value > 0:
        return positive
    if value < 0:
        return negative
    return neutral
