"""Language and time-period summaries for the contents page.

Reports record their language filter and date range in one of several
places depending on which screen produced them.  Each value is resolved
by trying an ordered list of candidate locations and taking the first one
that yields something; candidates are never merged.
"""

from datetime import date, datetime
from typing import Any

import pandas as pd

from media_report.schema.design_system import format_long_date, format_month_year
from media_report.schema.models import DateRange

from .coercion import get_path


DEFAULT_LANGUAGE = "English"

_LANGUAGE_CANDIDATES = (
    ("languages",),
    ("filters", "languages"),
    ("formData", "languages"),
)

_DATE_RANGE_CANDIDATES = (
    (("startDate",), ("endDate",)),
    (("filters", "startDate"), ("filters", "endDate")),
    (("formData", "startDate"), ("formData", "endDate")),
    (("dateRange", "start"), ("dateRange", "end")),
    (("period", "start"), ("period", "end")),
)


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------

def resolve_languages(report: Any) -> list[str]:
    """First non-empty language list found on the report, else []."""
    for path in _LANGUAGE_CANDIDATES:
        value = get_path(report, *path)
        if isinstance(value, (list, tuple)) and value:
            return [str(v) for v in value]
    return []


def summarize_languages_from_report(report: Any) -> str:
    """Short language label: up to three names, else two plus a count.

    Examples:
        {}                                          -> "English"
        {"languages": ["English", "French"]}        -> "English, French"
        {"languages": ["English", "French",
                       "Setswana", "Zulu"]}         -> "English, French +2 more"
    """
    languages = resolve_languages(report)
    if not languages:
        return DEFAULT_LANGUAGE
    if len(languages) <= 3:
        return ", ".join(languages)
    return f"{', '.join(languages[:2])} +{len(languages) - 2} more"


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def to_datetime(value: Any) -> datetime | None:
    """Parse a date-like value; falsy or unparsable values yield None.

    Accepts datetime/date objects, ISO-like strings, and epoch
    milliseconds.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            parsed = pd.to_datetime(value, unit="ms", errors="coerce")
        else:
            parsed = pd.to_datetime(str(value), errors="coerce")
    except (OverflowError, ValueError, pd.errors.OutOfBoundsDatetime):
        # epochs outside the Timestamp range raise despite errors="coerce"
        return None
    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def resolve_date_range_from_report(report: Any) -> DateRange:
    """First candidate pair with at least one side set; else an empty range."""
    for start_path, end_path in _DATE_RANGE_CANDIDATES:
        start = get_path(report, *start_path)
        end = get_path(report, *end_path)
        if start or end:
            return DateRange(start=to_datetime(start), end=to_datetime(end))
    return DateRange()


def format_time_period_smart(start: datetime | None = None,
                             end: datetime | None = None) -> str:
    """Human-readable period label.

    Examples:
        (None, None)                  -> "-"
        (2024-09-01, 2024-09-30)      -> "September 2024"
        (2024-09-01, 2024-10-15)      -> "September 1, 2024 – October 15, 2024"
        (2024-09-01, None)            -> "From September 1, 2024"
        (None, 2024-09-30)            -> "Until September 30, 2024"
    """
    if start is None and end is None:
        return "-"
    if start is not None and end is not None:
        if start.year == end.year and start.month == end.month:
            return format_month_year(start)
        return f"{format_long_date(start)} – {format_long_date(end)}"
    if start is not None:
        return f"From {format_long_date(start)}"
    return f"Until {format_long_date(end)}"


def summarize_time_period_from_report(report: Any) -> str:
    period = resolve_date_range_from_report(report)
    return format_time_period_smart(period.start, period.end)
