"""Report schema package — typed models, labels, formatting and loaders.

- models.py: Dataclasses for totals, pages, contents, summary, cover, deck config
- labels.py: Module and media type display labels
- design_system.py: Number, currency and date formatting
- loader.py: YAML deck configuration and JSON/YAML report loading
"""

from .design_system import (
    format_currency,
    format_long_date,
    format_month_year,
    format_number,
    format_total,
    sentiment_color,
)
from .labels import (
    EXECUTIVE_SUMMARY,
    MEDIA_TYPE_LABELS,
    MEDIA_TYPES,
    MODULE_LABELS,
    media_type_label,
    module_label,
    resolve_media_type,
)
from .loader import load_config, load_organization, load_report, save_config
from .models import (
    Contents,
    ContentsRow,
    ContentsSection,
    CoverDetails,
    DateRange,
    DeckConfig,
    DesignSystem,
    FontSpec,
    PageEntry,
    PageIndex,
    Position,
    ReportSummary,
    Totals,
)

__all__ = [
    # Models
    "Contents",
    "ContentsRow",
    "ContentsSection",
    "CoverDetails",
    "DateRange",
    "DeckConfig",
    "DesignSystem",
    "FontSpec",
    "PageEntry",
    "PageIndex",
    "Position",
    "ReportSummary",
    "Totals",
    # Labels
    "EXECUTIVE_SUMMARY",
    "MEDIA_TYPE_LABELS",
    "MEDIA_TYPES",
    "MODULE_LABELS",
    "media_type_label",
    "module_label",
    "resolve_media_type",
    # Loader
    "load_config",
    "load_organization",
    "load_report",
    "save_config",
    # Formatting
    "format_currency",
    "format_long_date",
    "format_month_year",
    "format_number",
    "format_total",
    "sentiment_color",
]
