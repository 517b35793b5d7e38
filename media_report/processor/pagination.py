"""Page index builder — assigns page numbers to report module pages.

Page 1 is the cover and page 2 the contents page; module pages follow
from page 3.  Executive summaries always come first, in encounter order
across media types, followed by every other module in the order the
media types and their modules were supplied.

The contents listing re-sorts the non-executive rows of each media type
alphabetically by label for readability, but keeps the page numbers
assigned from encounter order, so printed page numbers are not
necessarily increasing down the list.

Usage::

    modules_data = build_modules_data(report)
    index = build_page_index(list(modules_data), modules_data)
    index.page_for("articles", "executiveSummary")   # -> 3
    contents = build_contents(index)
    pages = build_pages(index.ordered_modules)        # cover, contents, ...
"""

from typing import Any, Callable

from media_report.schema.labels import (
    EXECUTIVE_SUMMARY,
    SENTIMENT_TREND,
    media_type_label,
    module_label,
)
from media_report.schema.models import (
    MODULE_START_PAGE,
    Contents,
    ContentsRow,
    ContentsSection,
    PageEntry,
    PageIndex,
    page_key,
)


COVER = "cover"
CONTENTS = "contents"
ELLIPSIS = "..."

DEFAULT_BUCKET = "articles"
ACTIVATION_KEYS = ("Enter", " ", "Space")


# ---------------------------------------------------------------------------
# Module normalization
# ---------------------------------------------------------------------------

def normalize_modules(modules: Any) -> dict[str, dict[str, bool]]:
    """Normalize a report's ``modules`` field to ``{mediaType: {module: enabled}}``.

    Accepted shapes:
        {"topSources": True, ...}                  -> articles bucket
        {"posts": {"topSources": True, ...}, ...}  -> as given
        ["topSources", ...]                        -> articles bucket, all enabled
    """
    if isinstance(modules, (list, tuple)):
        names = [str(m) for m in modules if isinstance(m, str) and m]
        return {DEFAULT_BUCKET: {name: True for name in names}} if names else {}
    if not isinstance(modules, dict) or not modules:
        return {}

    if all(isinstance(v, bool) for v in modules.values()):
        return {DEFAULT_BUCKET: dict(modules)}

    out: dict[str, dict[str, bool]] = {}
    for media_type, value in modules.items():
        if not isinstance(value, dict):
            continue
        inner: dict[str, bool] = {}
        for module, enabled in value.items():
            if isinstance(enabled, bool):
                inner[module] = enabled
            elif isinstance(enabled, (dict, list)):
                inner[module] = True
        if inner:
            out[media_type] = inner
    return out


def enabled_modules(modules: dict[str, dict[str, bool]]) -> dict[str, dict[str, bool]]:
    """Drop disabled modules and media types left with nothing enabled."""
    out = {}
    for media_type, mods in modules.items():
        kept = {m: True for m, enabled in mods.items() if enabled}
        if kept:
            out[media_type] = kept
    return out


def build_modules_data(report: Any) -> dict[str, dict[str, bool]]:
    """Enabled modules per media type, always including the articles
    executive summary and sentiment trend pages."""
    raw = report.get("modules") if isinstance(report, dict) else None
    modules = normalize_modules(raw)
    articles = dict(modules.get(DEFAULT_BUCKET, {}))
    articles[EXECUTIVE_SUMMARY] = True
    articles[SENTIMENT_TREND] = True
    modules[DEFAULT_BUCKET] = articles
    return enabled_modules(modules)


# ---------------------------------------------------------------------------
# Page index
# ---------------------------------------------------------------------------

def build_page_index(media_types: list[str], modules_data: dict[str, Any]) -> PageIndex:
    """Assign a page number to every ``(mediaType, module)`` pair.

    Args:
        media_types: Media type keys in display order.  A media type that
            appears more than once is only indexed the first time.
        modules_data: ``{mediaType: {module: content}}``; only module
            names matter.

    Returns:
        PageIndex with entries numbered contiguously from page 3.
    """
    exec_pages: list[PageEntry] = []
    other_pages: list[PageEntry] = []
    seen: set[str] = set()

    for media_type in media_types:
        if media_type in seen:
            continue
        seen.add(media_type)
        modules = modules_data.get(media_type) if isinstance(modules_data, dict) else None
        if not isinstance(modules, dict):
            continue
        for module in modules:
            entry = PageEntry(media_type=media_type, module=module)
            if module == EXECUTIVE_SUMMARY:
                exec_pages.append(entry)
            else:
                other_pages.append(entry)

    ordered = exec_pages + other_pages
    by_key: dict[str, int] = {}
    for i, entry in enumerate(ordered):
        entry.page = MODULE_START_PAGE + i
        by_key[page_key(entry.media_type, entry.module)] = entry.page

    return PageIndex(
        ordered_modules=ordered,
        page_index_by_key=by_key,
        exec_pages=exec_pages,
        other_pages=other_pages,
    )


# ---------------------------------------------------------------------------
# Contents listing
# ---------------------------------------------------------------------------

def _row(entry: PageEntry, labels: dict[str, str] | None) -> ContentsRow:
    return ContentsRow(
        media_type=entry.media_type,
        module=entry.module,
        label=module_label(entry.module, labels),
        page=entry.page,
    )


def build_contents(index: PageIndex,
                   module_labels: dict[str, str] | None = None,
                   media_type_labels: dict[str, str] | None = None) -> Contents:
    """Build the contents listing from a page index.

    Executive summary rows come first; the remaining rows are grouped by
    media type and sorted by label (case-insensitive), keeping the page
    numbers the index assigned.
    """
    contents = Contents(executive=[_row(e, module_labels) for e in index.exec_pages])

    sections: dict[str, ContentsSection] = {}
    for entry in index.other_pages:
        section = sections.get(entry.media_type)
        if section is None:
            section = ContentsSection(
                media_type=entry.media_type,
                label=media_type_label(entry.media_type, media_type_labels),
            )
            sections[entry.media_type] = section
        section.rows.append(_row(entry, module_labels))

    for section in sections.values():
        section.rows.sort(key=lambda r: (r.label.lower(), r.module))
    contents.sections = list(sections.values())
    return contents


def activate(row: ContentsRow, on_navigate: Callable[[int], Any],
             key: str | None = None) -> bool:
    """Navigate to a contents row's page on click or Enter/Space.

    Returns True when *on_navigate* was called.
    """
    if key is not None and key not in ACTIVATION_KEYS:
        return False
    on_navigate(row.page)
    return True


# ---------------------------------------------------------------------------
# Page sequence and pager
# ---------------------------------------------------------------------------

def build_pages(ordered_modules: list[PageEntry]) -> list:
    """Full page sequence: cover, contents, then every module page."""
    return [COVER, CONTENTS, *ordered_modules]


def clamp_page(current: int, total: int) -> int:
    """Keep a 1-based page number inside ``[1, total]``."""
    upper = max(total, 1)
    return min(max(current, 1), upper)


def pager_window(current: int, total: int) -> list:
    """Pager buttons: first, neighbours of *current*, last, with "..." gaps.

    Examples:
        pager_window(1, 8)  -> [1, 2, "...", 8]
        pager_window(5, 8)  -> [1, "...", 4, 5, 6, "...", 8]
        pager_window(1, 1)  -> [1]
    """
    items: list = [1]
    if current > 3:
        items.append(ELLIPSIS)
    items.extend(
        p for p in range(2, total)
        if abs(p - current) <= 1
    )
    if current < total - 2:
        items.append(ELLIPSIS)
    if total > 1:
        items.append(total)
    return items
