"""Report processor — aggregation, summaries and page indexing."""

from .coercion import to_num
from .modules import resolve_module_data
from .pagination import (
    activate,
    build_contents,
    build_modules_data,
    build_page_index,
    build_pages,
    clamp_page,
    normalize_modules,
    pager_window,
)
from .regions import normalize_country, summarize_countries_to_region
from .summaries import (
    format_time_period_smart,
    resolve_date_range_from_report,
    summarize_languages_from_report,
)
from .tables import media_breakdown, top_sources
from .totals import sum_totals_from_report
from .view import ReportView
