"""Deck builder — exports a report view as a PowerPoint presentation.

Produces one slide per report page, in page order:

    1. Cover — organization gradient, title, "Prepared for", report date
    2. Report Data & Contents — summary values and the contents listing
    3+ One slide per module page, titled with its media type and module

Usage::

    from media_report.generator.deck_builder import DeckBuilder
    from media_report.processor.view import ReportView

    view = ReportView(report, organization)
    pptx_bytes = DeckBuilder().build(view)

    with open("report.pptx", "wb") as f:
        f.write(pptx_bytes)
"""

import io
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd
from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.util import Inches, Pt

from media_report.processor.coercion import get_field, to_num
from media_report.processor.modules import SentimentTrendData
from media_report.processor.sentiment import map_sentiment_to_label, spike_color
from media_report.processor.tables import top_sources
from media_report.processor.totals import read_summary
from media_report.processor.view import ReportView
from media_report.schema.design_system import (
    format_currency,
    format_number,
)
from media_report.schema.labels import (
    EXECUTIVE_SUMMARY,
    MEDIA_SUMMARY,
    SENTIMENT_TREND,
    media_type_label,
    module_label,
)
from media_report.schema.models import (
    DeckConfig,
    FontSpec,
    PageEntry,
    Position,
)

from .charts import add_sentiment_chart, add_source_chart, hex_to_rgb


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

COVER_TITLE = "Media Insights Report"
CONTENTS_TITLE = "Report Data & Contents"
VOLUME_FOOTNOTE = (
    "*Volume refers to mentions across selected sources, regions and time period."
)
PLACEHOLDER_TEXT = "Module content will be displayed here"

_MAX_TABLE_ROWS = 12
_MAX_TABLE_COLUMNS = 6

_ALIGN_MAP = {
    "left": PP_ALIGN.LEFT,
    "center": PP_ALIGN.CENTER,
    "right": PP_ALIGN.RIGHT,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _apply_font(run, font: FontSpec) -> None:
    run.font.name = font.name
    run.font.size = Pt(font.size_pt)
    run.font.bold = font.bold
    run.font.italic = font.italic
    run.font.color.rgb = hex_to_rgb(font.color)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(_cell_text(v) for v in value)
    if isinstance(value, dict):
        return ", ".join(f"{k}: {_cell_text(v)}" for k, v in value.items())
    return str(value)


def records_frame(records: list) -> pd.DataFrame:
    """Tabulate a list of row dicts, keeping at most six columns."""
    rows = [r for r in records if isinstance(r, dict)]
    df = pd.DataFrame.from_records(rows)
    if df.shape[1] > _MAX_TABLE_COLUMNS:
        df = df.iloc[:, :_MAX_TABLE_COLUMNS]
    return df


# ---------------------------------------------------------------------------
# DeckBuilder
# ---------------------------------------------------------------------------

class DeckBuilder:
    """Builds a PowerPoint deck from a :class:`ReportView`.

    Parameters
    ----------
    config : DeckConfig, optional
        Slide size, design system and label overrides.  Defaults to the
        built-in configuration.
    """

    def __init__(self, config: DeckConfig | None = None) -> None:
        self.config = config or DeckConfig()
        self.design = self.config.design

    def build(self, view: ReportView) -> bytes:
        """Build the deck and return it as bytes.

        The slide count always equals ``view.total_pages``.
        """
        prs = Presentation()
        prs.slide_width = Inches(self.config.width_inches)
        prs.slide_height = Inches(self.config.height_inches)

        self._build_cover(prs, view)
        self._build_contents(prs, view)
        for entry in view.page_index.ordered_modules:
            self._build_module(prs, view, entry)

        buf = io.BytesIO()
        prs.save(buf)
        return buf.getvalue()

    def build_to_file(self, view: ReportView, path: str | Path) -> None:
        """Build the deck and write it to a file path."""
        data = self.build(view)
        Path(path).write_bytes(data)

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------

    def _font(self, size_pt: float | None = None, bold: bool = False,
              color: str | None = None, italic: bool = False) -> FontSpec:
        return FontSpec(
            name=self.design.primary_font,
            size_pt=size_pt or self.design.body_size_pt,
            bold=bold,
            italic=italic,
            color=color or self.design.dark_text,
        )

    # ------------------------------------------------------------------
    # Primitive shapes
    # ------------------------------------------------------------------

    def _new_slide(self, prs: Presentation):
        layout = prs.slide_layouts[6]  # Blank layout
        return prs.slides.add_slide(layout)

    def _add_text(self, slide, pos: Position, text: str, font: FontSpec,
                  align: str = "left") -> None:
        txbox = slide.shapes.add_textbox(
            Inches(pos.left), Inches(pos.top),
            Inches(pos.width), Inches(pos.height),
        )
        tf = txbox.text_frame
        tf.word_wrap = True
        p = tf.paragraphs[0]
        p.alignment = _ALIGN_MAP.get(align, PP_ALIGN.LEFT)
        run = p.add_run()
        run.text = text
        _apply_font(run, font)

    def _add_lines(self, slide, pos: Position, lines: list[tuple[str, FontSpec]]) -> None:
        """A text box with one paragraph per ``(text, font)`` line."""
        txbox = slide.shapes.add_textbox(
            Inches(pos.left), Inches(pos.top),
            Inches(pos.width), Inches(pos.height),
        )
        tf = txbox.text_frame
        tf.word_wrap = True
        for i, (text, font) in enumerate(lines):
            p = tf.paragraphs[0] if i == 0 else tf.add_paragraph()
            run = p.add_run()
            run.text = text
            _apply_font(run, font)

    def _add_page_number(self, slide, number: int) -> None:
        self._add_text(
            slide,
            Position(self.config.width_inches - 1.2, self.config.height_inches - 0.5, 0.8, 0.3),
            str(number),
            self._font(self.design.caption_size_pt, color=self.design.muted_text),
            align="right",
        )

    def _add_kpi(self, slide, pos: Position, label: str, value: str,
                 caption: str | None = None,
                 value_color: str | None = None) -> None:
        box = slide.shapes.add_shape(
            MSO_SHAPE.ROUNDED_RECTANGLE,
            Inches(pos.left), Inches(pos.top),
            Inches(pos.width), Inches(pos.height),
        )
        box.fill.solid()
        box.fill.fore_color.rgb = hex_to_rgb(self.design.white)
        box.line.color.rgb = hex_to_rgb(self.design.border)

        tf = box.text_frame
        tf.word_wrap = True
        tf.vertical_anchor = MSO_ANCHOR.MIDDLE
        lines = [
            (label, self._font(self.design.kpi_label_size_pt, color=self.design.muted_text)),
            (value, self._font(self.design.kpi_number_size_pt, bold=True,
                               color=value_color or self.design.primary)),
        ]
        if caption:
            lines.append((caption, self._font(self.design.caption_size_pt, color=self.design.muted_text)))
        for i, (text, font) in enumerate(lines):
            p = tf.paragraphs[0] if i == 0 else tf.add_paragraph()
            p.alignment = PP_ALIGN.CENTER
            run = p.add_run()
            run.text = text
            _apply_font(run, font)

    def _add_table(self, slide, pos: Position, df: pd.DataFrame,
                   headers: list[str] | None = None) -> None:
        df = df.head(_MAX_TABLE_ROWS)
        num_rows = len(df) + 1  # +1 for header
        num_cols = len(df.columns)
        table = slide.shapes.add_table(
            num_rows, num_cols,
            Inches(pos.left), Inches(pos.top),
            Inches(pos.width), Inches(pos.height),
        ).table

        headers = headers or [str(c) for c in df.columns]
        for col_idx, header in enumerate(headers):
            cell = table.cell(0, col_idx)
            cell.text = header
            self._style_cell(cell, is_header=True)

        for row_idx, row in enumerate(df.itertuples(index=False), start=1):
            for col_idx, value in enumerate(row):
                cell = table.cell(row_idx, col_idx)
                cell.text = _cell_text(None if _is_na(value) else value)
                self._style_cell(cell, is_header=False)

    def _style_cell(self, cell, is_header: bool) -> None:
        cell.vertical_anchor = MSO_ANCHOR.MIDDLE
        if is_header:
            cell.fill.solid()
            cell.fill.fore_color.rgb = hex_to_rgb(self.design.header_fill)
        for paragraph in cell.text_frame.paragraphs:
            for run in paragraph.runs:
                run.font.name = self.design.primary_font
                run.font.size = Pt(11.0)
                run.font.bold = is_header
                color = self.design.white if is_header else self.design.dark_text
                run.font.color.rgb = hex_to_rgb(color)

    def _add_message(self, slide, text: str, detail: str | None = None) -> None:
        """Centered muted message used for empty module pages."""
        lines = [(text, self._font(18.0, color=self.design.muted_text))]
        if detail:
            lines.append((detail, self._font(self.design.body_size_pt, color=self.design.muted_text)))
        self._add_lines(slide, Position(1.5, 3.0, self.config.width_inches - 3.0, 1.5), lines)

    # ------------------------------------------------------------------
    # Cover (page 1)
    # ------------------------------------------------------------------

    def _build_cover(self, prs: Presentation, view: ReportView) -> None:
        slide = self._new_slide(prs)
        cover = view.cover
        width, height = self.config.width_inches, self.config.height_inches

        background = slide.shapes.add_shape(
            MSO_SHAPE.RECTANGLE, 0, 0, Inches(width), Inches(height),
        )
        background.line.fill.background()
        fill = background.fill
        fill.gradient()
        fill.gradient_angle = 270  # top to bottom
        fill.gradient_stops[0].color.rgb = hex_to_rgb(cover.gradient_top)
        fill.gradient_stops[1].color.rgb = hex_to_rgb(cover.gradient_bottom)

        white = self.design.white
        self._add_text(
            slide, Position(0.5, height / 2 - 1.2, width - 1.0, 1.0),
            COVER_TITLE, self._font(self.design.title_size_pt, bold=True, color=white),
            align="center",
        )
        self._add_text(
            slide, Position(0.5, height / 2, width - 1.0, 0.5),
            f"Prepared for {cover.organization_name}",
            self._font(18.0, color=white), align="center",
        )
        self._add_text(
            slide, Position(0.5, height - 1.4, 6.0, 0.5),
            cover.report_date, self._font(18.0, bold=True, color=white),
        )
        self._add_text(
            slide, Position(0.5, height - 0.6, 6.0, 0.4),
            f"© {self.config.copyright_holder} | {datetime.now().year}",
            self._font(self.design.caption_size_pt, color=white),
        )
        self._add_text(
            slide, Position(width - 6.5, height - 0.6, 6.0, 0.4),
            "Unauthorized Reproduction is Prohibited",
            self._font(self.design.caption_size_pt, color=white), align="right",
        )

    # ------------------------------------------------------------------
    # Contents (page 2)
    # ------------------------------------------------------------------

    def _build_contents(self, prs: Presentation, view: ReportView) -> None:
        slide = self._new_slide(prs)
        width, height = self.config.width_inches, self.config.height_inches
        half = (width - 1.5) / 2

        self._add_text(
            slide, Position(0.5, 0.3, width - 1.0, 0.8),
            CONTENTS_TITLE, self._font(self.design.header_size_pt, bold=True),
        )

        summary = view.summary
        data = pd.DataFrame(
            [
                ("Volume", summary.volume),
                ("Regions", summary.region),
                ("Reach", summary.reach),
                ("Language", summary.language),
                ("Time Period", summary.time_period),
            ],
            columns=["Report Data", ""],
        )
        self._add_table(slide, Position(0.5, 1.3, half, 3.0), data)

        self._add_text(
            slide, Position(1.0 + half, 1.3, half, 0.5),
            "Contents", self._font(20.0, bold=True),
        )
        self._add_lines(slide, Position(1.0 + half, 1.9, half, height - 2.8),
                        self._contents_lines(view))

        self._add_text(
            slide, Position(0.5, height - 0.7, width - 2.0, 0.4),
            VOLUME_FOOTNOTE,
            self._font(self.design.caption_size_pt, italic=True, color=self.design.muted_text),
        )
        self._add_page_number(slide, 2)

    def _contents_lines(self, view: ReportView) -> list[tuple[str, FontSpec]]:
        body = self._font()
        section_font = self._font(self.design.kpi_label_size_pt, bold=True,
                                  color=self.design.muted_text)
        lines = []
        n = 0
        for row in view.contents.executive:
            n += 1
            lines.append((f"{n}. {row.label} ........ {row.page}", body))
        for section in view.contents.sections:
            lines.append((section.label, section_font))
            for row in section.rows:
                n += 1
                lines.append((f"{n}. {row.label} ........ {row.page}", body))
        if not lines:
            lines.append(("", body))
        return lines

    # ------------------------------------------------------------------
    # Module pages (page 3+)
    # ------------------------------------------------------------------

    def _build_module(self, prs: Presentation, view: ReportView,
                      entry: PageEntry) -> None:
        slide = self._new_slide(prs)
        labels = {**view.module_labels, **self.config.module_labels}
        media_labels = {**view.media_type_labels, **self.config.media_type_labels}
        display_media = media_type_label(entry.media_type, media_labels)
        display_module = module_label(entry.module, labels)

        self._add_text(
            slide, Position(0.5, 0.3, 8.0, 0.4), display_media,
            self._font(self.design.kpi_label_size_pt, color=self.design.muted_text),
        )
        self._add_text(
            slide, Position(0.5, 0.7, self.config.width_inches - 1.0, 0.8),
            display_module, self._font(self.design.header_size_pt, bold=True),
        )

        data = view.module_data(entry)
        renderers = {
            EXECUTIVE_SUMMARY: self._render_executive_summary,
            MEDIA_SUMMARY: self._render_media_summary,
            SENTIMENT_TREND: self._render_sentiment_trend,
            "topSources": self._render_top_sources,
        }
        renderer = renderers.get(entry.module, self._render_generic)
        renderer(slide, data, display_module, display_media)
        self._add_page_number(slide, entry.page)

    def _render_executive_summary(self, slide, data, module, media) -> None:
        data = data if isinstance(data, dict) else {}
        overall = data.get("overallSentiment")
        if isinstance(overall, (int, float)) and not isinstance(overall, bool):
            overall = map_sentiment_to_label(overall)
        sentiment = str(overall or "Neutral").capitalize()
        mentions = to_num(data.get("totalMentions"))
        themes = data.get("topThemes") if isinstance(data.get("topThemes"), list) else []

        self._add_kpi(slide, Position(0.5, 1.7, 3.8, 1.4), "Overall Sentiment", sentiment,
                      value_color=spike_color(sentiment))
        self._add_kpi(slide, Position(4.7, 1.7, 3.8, 1.4), "Total Mentions",
                      format_number(mentions))
        self._add_kpi(slide, Position(8.9, 1.7, 3.8, 1.4), "Top Themes", str(len(themes)))

        insights = data.get("keyInsights")
        lines = [("Key Insights", self._font(18.0, bold=True))]
        if isinstance(insights, list) and insights:
            lines.extend((f"• {item}", self._font()) for item in insights)
        else:
            lines.append(("No insights available",
                          self._font(italic=True, color=self.design.muted_text)))
        self._add_lines(slide, Position(0.5, 3.4, self.config.width_inches - 1.0, 3.4), lines)

    def _render_media_summary(self, slide, data, module, media) -> None:
        totals = read_summary(data)
        if not totals.volume:
            totals.volume = to_num(get_field(data, "totalMentions"))
        if totals.is_empty():
            self._add_message(slide, "No media summary data available")
            return
        self._add_kpi(slide, Position(0.5, 2.0, 3.8, 2.0), "Volume",
                      format_number(totals.volume), "Total Mentions")
        self._add_kpi(slide, Position(4.7, 2.0, 3.8, 2.0), "Total AVE",
                      format_currency(totals.ave), "Advertising Value Equivalent")
        self._add_kpi(slide, Position(8.9, 2.0, 3.8, 2.0), "Total Reach",
                      format_number(totals.reach), "Potential Audience")

    def _render_sentiment_trend(self, slide, data, module, media) -> None:
        trend = data if isinstance(data, SentimentTrendData) else SentimentTrendData()
        added = add_sentiment_chart(
            slide, trend,
            Position(0.5, 1.6, self.config.width_inches - 1.0, 4.2),
            self.design,
        )
        if not added:
            self._add_message(slide, "No sentiment data available")
            return
        if trend.annotations:
            lines = [
                (f"{a.date} · {a.type} · {a.summary}",
                 self._font(self.design.caption_size_pt, color=spike_color(a.type)))
                for a in trend.annotations[:4]
            ]
            self._add_lines(slide, Position(0.5, 5.9, self.config.width_inches - 1.0, 0.9), lines)

    def _render_top_sources(self, slide, data, module, media) -> None:
        df = top_sources(data)
        if df.empty:
            self._add_message(slide, "No source data available")
            return
        add_source_chart(slide, df, Position(0.5, 1.6, 7.0, 5.0), self.design)
        self._add_table(
            slide, Position(7.8, 1.6, self.config.width_inches - 8.3, 4.0),
            df[["source", "total"]], headers=["Source", "Mentions"],
        )

    def _render_generic(self, slide, data, module, media) -> None:
        pos = Position(0.5, 1.7, self.config.width_inches - 1.0, 4.5)
        records = records_frame(data) if isinstance(data, list) else None
        if records is not None and len(records.columns) and len(records):
            self._add_table(slide, pos, records)
        elif isinstance(data, list) and data:
            self._add_lines(slide, pos, [(f"• {_cell_text(v)}", self._font()) for v in data])
        elif isinstance(data, dict) and data:
            df = pd.DataFrame(
                [(str(k), _cell_text(v)) for k, v in data.items()],
                columns=["Field", "Value"],
            )
            self._add_table(slide, pos, df)
        elif isinstance(data, str) and data.strip():
            self._add_text(slide, pos, data, self._font())
        else:
            self._add_message(
                slide, PLACEHOLDER_TEXT,
                f"This section would show {module} data for {media}",
            )


def _is_na(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


# ---------------------------------------------------------------------------
# Convenience function
# ---------------------------------------------------------------------------

def build_deck(view: ReportView, config: DeckConfig | None = None) -> bytes:
    """One-shot convenience: build a PPTX from a report view."""
    return DeckBuilder(config).build(view)
