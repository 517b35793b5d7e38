"""Report view assembly — everything the report viewer renders.

Takes a report record (as fetched from the backend) and an optional
organization record, and derives:

- the enabled modules per media type and their page numbers
- the contents listing (page 2)
- the "Report Data" summary: volume, reach, AVE, region, language, period
- the cover details (organization branding and report date)

Every value is best-effort: malformed or missing report fields fall back
to display defaults instead of raising.

Usage::

    view = ReportView(report, organization)
    view.summary.region            # "Southern Africa"
    view.page_index.page_for("articles", "executiveSummary")   # 3
    view.page(4)                   # PageEntry for page 4
"""

import re
from datetime import date, datetime
from typing import Any

from media_report.schema.design_system import (
    format_currency,
    format_long_date,
    format_total,
)
from media_report.schema.labels import has_module_label
from media_report.schema.models import (
    Contents,
    CoverDetails,
    PageEntry,
    PageIndex,
    ReportSummary,
)

from .coercion import get_field, get_path
from .modules import resolve_module_data
from .pagination import (
    build_contents,
    build_modules_data,
    build_page_index,
    build_pages,
    clamp_page,
)
from .regions import summarize_countries_to_region
from .summaries import (
    summarize_languages_from_report,
    summarize_time_period_from_report,
    to_datetime,
)
from .totals import sum_totals_from_report


DEFAULT_GRADIENT_TOP = "#3175b6"
DEFAULT_GRADIENT_BOTTOM = "#2e3e8a"
DEFAULT_ORGANIZATION = "Organization"

_REGION_CANDIDATES = (("region",), ("filters", "region"))
_HEX_COLOR = re.compile(r"#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})")


# ---------------------------------------------------------------------------
# Summary helpers
# ---------------------------------------------------------------------------

def summarize_region_from_report(report: Any) -> str:
    """Region label from the report scope, with the report's region fallback."""
    scope = get_field(report, "scope")
    countries = [c for c in scope if isinstance(c, str)] if isinstance(scope, list) else []
    fallback = None
    for path in _REGION_CANDIDATES:
        value = get_path(report, *path)
        if isinstance(value, str) and value:
            fallback = value
            break
    return summarize_countries_to_region(countries, fallback)


def build_summary(report: Any) -> ReportSummary:
    totals = sum_totals_from_report(report)
    return ReportSummary(
        totals=totals,
        volume=format_total(totals.volume),
        reach=format_total(totals.reach),
        ave=format_currency(totals.ave) if totals.ave else "-",
        region=summarize_region_from_report(report),
        language=summarize_languages_from_report(report),
        time_period=summarize_time_period_from_report(report),
    )


def _hex_color(value: Any, default: str) -> str:
    """Normalize ``#RRGGBB`` / ``#RGB`` (``#`` optional); anything else -> default."""
    match = _HEX_COLOR.fullmatch(value.strip()) if isinstance(value, str) else None
    if not match:
        return default
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


def build_cover(report: Any, organization: Any = None,
                today: date | None = None) -> CoverDetails:
    """Cover branding; an unknown or unparsable report date shows today."""
    org = organization if isinstance(organization, dict) else {}
    created = get_field(report, "createdAt") or get_field(report, "created_at")
    created_at = to_datetime(created)
    if created_at is None:
        created_at = today or datetime.now().date()
    return CoverDetails(
        organization_name=org.get("alias") or org.get("organizationName") or DEFAULT_ORGANIZATION,
        gradient_top=_hex_color(org.get("gradientTop"), DEFAULT_GRADIENT_TOP),
        gradient_bottom=_hex_color(org.get("gradientBottom"), DEFAULT_GRADIENT_BOTTOM),
        report_date=format_long_date(created_at),
        logo_url=org.get("logoUrl") or None,
    )


# ---------------------------------------------------------------------------
# ReportView
# ---------------------------------------------------------------------------

class ReportView:
    """Derived, render-ready view of one report.

    Args:
        report: Report record from the backend.
        organization: Organization record (name, alias, branding), optional.
        modules_data: ``{mediaType: {module: content}}``; derived from the
            report's ``modules`` field when omitted.
        media_types: Media type order; the key order of *modules_data*
            when omitted.
        module_labels: Overrides for module display labels.
        media_type_labels: Overrides for media type display labels.
        today: Date shown on the cover when the report has none.
    """

    def __init__(self, report: Any, organization: Any = None,
                 modules_data: dict | None = None,
                 media_types: list[str] | None = None,
                 module_labels: dict[str, str] | None = None,
                 media_type_labels: dict[str, str] | None = None,
                 today: date | None = None):
        self.report = report if isinstance(report, dict) else {}
        self.organization = organization
        self.module_labels = module_labels or {}
        self.media_type_labels = media_type_labels or {}

        self.modules_data = (
            modules_data if modules_data is not None
            else build_modules_data(self.report)
        )
        self.media_types = (
            list(media_types) if media_types is not None
            else list(self.modules_data)
        )

        self.page_index: PageIndex = build_page_index(self.media_types, self.modules_data)
        self.contents: Contents = build_contents(
            self.page_index, self.module_labels, self.media_type_labels,
        )
        self.pages = build_pages(self.page_index.ordered_modules)
        self.summary: ReportSummary = build_summary(self.report)
        self.cover: CoverDetails = build_cover(self.report, organization, today)
        self.warnings: list[str] = self._collect_warnings()

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    @property
    def title(self) -> str:
        return str(self.report.get("title") or "Report")

    def page(self, number: int):
        """Page at a 1-based number (clamped): "cover", "contents" or a PageEntry."""
        return self.pages[clamp_page(number, self.total_pages) - 1]

    def module_data(self, entry: PageEntry) -> Any:
        return resolve_module_data(self.report, entry.media_type, entry.module)

    def _collect_warnings(self) -> list[str]:
        warnings = []
        for entry in self.page_index.ordered_modules:
            if not has_module_label(entry.module, self.module_labels):
                warnings.append(
                    f"No label for module {entry.module!r} ({entry.media_type}); "
                    f"showing the raw key"
                )
        return warnings

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "total_pages": self.total_pages,
            "summary": self.summary.to_dict(),
            "cover": self.cover.to_dict(),
            "pages": [e.to_dict() for e in self.page_index.ordered_modules],
            "contents": self.contents.to_dict(),
            "warnings": list(self.warnings),
        }
