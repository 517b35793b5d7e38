"""Report view models - the contract between processor, generator, and QA.

Defines the typed structure of a rendered report: aggregate totals, the
page entries assigned to each module, the contents listing shown on page 2,
the display summary, the cover details, and the deck styling configuration
used when a report is exported.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


# ---------------------------------------------------------------------------
# Page constants
# ---------------------------------------------------------------------------

COVER_PAGE = 1
CONTENTS_PAGE = 2
MODULE_START_PAGE = 3


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

@dataclass
class Totals:
    """Volume, reach and AVE summed over a report tree."""
    volume: float = 0
    reach: float = 0
    ave: float = 0

    def __add__(self, other: "Totals") -> "Totals":
        return Totals(
            volume=self.volume + other.volume,
            reach=self.reach + other.reach,
            ave=self.ave + other.ave,
        )

    def is_empty(self) -> bool:
        return not (self.volume or self.reach or self.ave)

    def to_dict(self) -> dict:
        return {"volume": self.volume, "reach": self.reach, "ave": self.ave}


@dataclass
class DateRange:
    """A report period; either side may be unknown."""
    start: datetime | None = None
    end: datetime | None = None

    def is_empty(self) -> bool:
        return self.start is None and self.end is None


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------

@dataclass
class PageEntry:
    """One module content page, addressed by media type and module key."""
    media_type: str                      # e.g. "articles"
    module: str                          # e.g. "executiveSummary"
    page: int | None = None              # assigned by the page index

    @property
    def key(self) -> str:
        return page_key(self.media_type, self.module)

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"mediaType": self.media_type, "module": self.module}
        if self.page is not None:
            d["page"] = self.page
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "PageEntry":
        return cls(media_type=d["mediaType"], module=d["module"],
                   page=d.get("page"))


def page_key(media_type: str, module: str) -> str:
    """Lookup key used by :class:`PageIndex`."""
    return f"{media_type}:{module}"


@dataclass
class PageIndex:
    """Page numbers for every module page of a report.

    ``ordered_modules`` is the finalized page order (executive summaries
    first, then every other module in encounter order).  ``other_pages``
    keeps the non-executive entries separately for the contents listing.
    """
    ordered_modules: list[PageEntry] = field(default_factory=list)
    page_index_by_key: dict[str, int] = field(default_factory=dict)
    exec_pages: list[PageEntry] = field(default_factory=list)
    other_pages: list[PageEntry] = field(default_factory=list)

    def page_for(self, media_type: str, module: str) -> int | None:
        return self.page_index_by_key.get(page_key(media_type, module))

    @property
    def last_page(self) -> int:
        """Highest page number, counting the cover and contents pages."""
        return CONTENTS_PAGE + len(self.ordered_modules)

    def __len__(self) -> int:
        return len(self.ordered_modules)


# ---------------------------------------------------------------------------
# Contents listing
# ---------------------------------------------------------------------------

@dataclass
class ContentsRow:
    """A single navigable row on the contents page."""
    media_type: str
    module: str
    label: str
    page: int

    def to_dict(self) -> dict:
        return {
            "mediaType": self.media_type,
            "module": self.module,
            "label": self.label,
            "page": self.page,
        }


@dataclass
class ContentsSection:
    """Rows for one media type, sorted by label."""
    media_type: str
    label: str
    rows: list[ContentsRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "mediaType": self.media_type,
            "label": self.label,
            "rows": [r.to_dict() for r in self.rows],
        }


@dataclass
class Contents:
    """Contents page listing: executive summaries, then media-type sections."""
    executive: list[ContentsRow] = field(default_factory=list)
    sections: list[ContentsSection] = field(default_factory=list)

    def rows(self) -> list[ContentsRow]:
        """All rows in display order."""
        out = list(self.executive)
        for section in self.sections:
            out.extend(section.rows)
        return out

    def is_empty(self) -> bool:
        return not self.rows()

    def to_dict(self) -> dict:
        return {
            "executive": [r.to_dict() for r in self.executive],
            "sections": [s.to_dict() for s in self.sections],
        }


# ---------------------------------------------------------------------------
# Display values
# ---------------------------------------------------------------------------

@dataclass
class ReportSummary:
    """Values shown in the "Report Data" panel of the contents page."""
    totals: Totals
    volume: str
    reach: str
    ave: str
    region: str
    language: str
    time_period: str

    def to_dict(self) -> dict:
        return {
            "volume": self.volume,
            "reach": self.reach,
            "ave": self.ave,
            "region": self.region,
            "language": self.language,
            "time_period": self.time_period,
            "totals": self.totals.to_dict(),
        }


@dataclass
class CoverDetails:
    """Organization branding and date printed on the cover page."""
    organization_name: str = "Organization"
    gradient_top: str = "#3175b6"
    gradient_bottom: str = "#2e3e8a"
    report_date: str = ""
    logo_url: str | None = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "organization_name": self.organization_name,
            "gradient_top": self.gradient_top,
            "gradient_bottom": self.gradient_bottom,
            "report_date": self.report_date,
        }
        if self.logo_url:
            d["logo_url"] = self.logo_url
        return d


# ---------------------------------------------------------------------------
# Position and styling primitives
# ---------------------------------------------------------------------------

@dataclass
class Position:
    """Shape position and dimensions in inches."""
    left: float
    top: float
    width: float
    height: float


@dataclass
class FontSpec:
    """Typography specification for a text element."""
    name: str = "Inter"
    size_pt: float = 14.0
    bold: bool = False
    italic: bool = False
    color: str = "#000000"


# ---------------------------------------------------------------------------
# DesignSystem — deck styling rules
# ---------------------------------------------------------------------------

@dataclass
class DesignSystem:
    """Brand design system applied across all exported slides."""
    # Colors
    primary: str = "#3175B6"
    dark_text: str = "#111827"
    muted_text: str = "#6B7280"
    white: str = "#FFFFFF"
    border: str = "#D1D5DB"
    header_fill: str = "#2E3E8A"
    positive: str = "#10B981"
    negative: str = "#EF4444"
    neutral: str = "#9CA3AF"
    mixed: str = "#5D98FF"

    # Typography
    primary_font: str = "Inter"
    title_size_pt: float = 40.0
    header_size_pt: float = 28.0
    body_size_pt: float = 14.0
    kpi_number_size_pt: float = 32.0
    kpi_label_size_pt: float = 12.0
    caption_size_pt: float = 9.0

    def to_dict(self) -> dict:
        return {
            "colors": {
                "primary": self.primary,
                "dark_text": self.dark_text,
                "muted_text": self.muted_text,
                "white": self.white,
                "border": self.border,
                "header_fill": self.header_fill,
                "positive": self.positive,
                "negative": self.negative,
                "neutral": self.neutral,
                "mixed": self.mixed,
            },
            "typography": {
                "primary_font": self.primary_font,
                "title_size_pt": self.title_size_pt,
                "header_size_pt": self.header_size_pt,
                "body_size_pt": self.body_size_pt,
                "kpi_number_size_pt": self.kpi_number_size_pt,
                "kpi_label_size_pt": self.kpi_label_size_pt,
                "caption_size_pt": self.caption_size_pt,
            },
        }

    @classmethod
    def from_dict(cls, d: dict) -> "DesignSystem":
        defaults = cls()
        colors = d.get("colors", {})
        typo = d.get("typography", {})
        return cls(
            primary=colors.get("primary", defaults.primary),
            dark_text=colors.get("dark_text", defaults.dark_text),
            muted_text=colors.get("muted_text", defaults.muted_text),
            white=colors.get("white", defaults.white),
            border=colors.get("border", defaults.border),
            header_fill=colors.get("header_fill", defaults.header_fill),
            positive=colors.get("positive", defaults.positive),
            negative=colors.get("negative", defaults.negative),
            neutral=colors.get("neutral", defaults.neutral),
            mixed=colors.get("mixed", defaults.mixed),
            primary_font=typo.get("primary_font", defaults.primary_font),
            title_size_pt=typo.get("title_size_pt", defaults.title_size_pt),
            header_size_pt=typo.get("header_size_pt", defaults.header_size_pt),
            body_size_pt=typo.get("body_size_pt", defaults.body_size_pt),
            kpi_number_size_pt=typo.get("kpi_number_size_pt", defaults.kpi_number_size_pt),
            kpi_label_size_pt=typo.get("kpi_label_size_pt", defaults.kpi_label_size_pt),
            caption_size_pt=typo.get("caption_size_pt", defaults.caption_size_pt),
        )


# ---------------------------------------------------------------------------
# DeckConfig — top-level export configuration
# ---------------------------------------------------------------------------

@dataclass
class DeckConfig:
    """Export configuration: slide size, design system and label overrides.

    Label overrides are merged over the built-in module and media-type
    label tables; keys absent from both fall back to the raw key.
    """
    name: str = "Media Insights Report"
    width_inches: float = 13.333
    height_inches: float = 7.5
    design: DesignSystem = field(default_factory=DesignSystem)
    module_labels: dict[str, str] = field(default_factory=dict)
    media_type_labels: dict[str, str] = field(default_factory=dict)
    copyright_holder: str = "Social Light Botswana"

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "name": self.name,
            "dimensions": {
                "width_inches": self.width_inches,
                "height_inches": self.height_inches,
            },
            "copyright_holder": self.copyright_holder,
            "design": self.design.to_dict(),
        }
        if self.module_labels:
            d["module_labels"] = dict(self.module_labels)
        if self.media_type_labels:
            d["media_type_labels"] = dict(self.media_type_labels)
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "DeckConfig":
        dims = d.get("dimensions", {})
        return cls(
            name=d.get("name", "Media Insights Report"),
            width_inches=dims.get("width_inches", 13.333),
            height_inches=dims.get("height_inches", 7.5),
            design=DesignSystem.from_dict(d.get("design", {})),
            module_labels=dict(d.get("module_labels") or {}),
            media_type_labels=dict(d.get("media_type_labels") or {}),
            copyright_holder=d.get("copyright_holder", "Social Light Botswana"),
        )
