"""Chart generation module — renders chart shapes on report slides.

Converts module data into python-pptx chart shapes with the deck's
styling, colors, and positioning.

Supported charts:
    LINE   — sentiment trend (daily score and rolling average)
    BAR    — horizontal stacked tonality per media source

Usage:
    from media_report.generator.charts import add_sentiment_chart

    added = add_sentiment_chart(slide, trend, position, design)
"""

from __future__ import annotations

import math
from typing import Any

from pptx.chart.data import CategoryChartData
from pptx.dml.color import RGBColor
from pptx.enum.chart import XL_CHART_TYPE, XL_LEGEND_POSITION, XL_MARKER_STYLE
from pptx.util import Inches, Pt

from media_report.processor.sentiment import line_color
from media_report.schema.models import DesignSystem, Position


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def hex_to_rgb(hex_color: str) -> RGBColor:
    """Convert a hex color string (#RRGGBB) to an RGBColor."""
    hex_color = hex_color.lstrip("#")
    return RGBColor(
        int(hex_color[0:2], 16),
        int(hex_color[2:4], 16),
        int(hex_color[4:6], 16),
    )


def _safe_value(value: Any) -> float:
    """Coerce a value to a safe float for chart data.  None/NaN/inf → 0."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        if math.isnan(value) or math.isinf(value):
            return 0.0
        return float(value)
    return 0.0


def _build_category_chart_data(
    categories: list[str],
    series: dict[str, list],
) -> CategoryChartData:
    chart_data = CategoryChartData()
    chart_data.categories = categories
    for name, values in series.items():
        values = list(values)
        if len(values) < len(categories):
            values += [0.0] * (len(categories) - len(values))
        elif len(values) > len(categories):
            values = values[: len(categories)]
        chart_data.add_series(name, tuple(_safe_value(v) for v in values))
    return chart_data


def _apply_chart_style(chart, design: DesignSystem, legend: bool) -> None:
    chart.font.name = design.primary_font
    chart.font.size = Pt(design.caption_size_pt)
    chart.has_legend = legend
    if legend:
        chart.legend.include_in_layout = False
        chart.legend.position = XL_LEGEND_POSITION.BOTTOM
        chart.legend.font.name = design.primary_font
        chart.legend.font.size = Pt(design.caption_size_pt)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def add_chart(
    slide,
    chart_type,
    position: Position,
    categories: list[str],
    series: dict[str, list],
    design: DesignSystem,
    colors: dict[str, str] | None = None,
):
    """Add a category chart to a slide.

    Args:
        slide: python-pptx Slide object.
        chart_type: An ``XL_CHART_TYPE`` member.
        position: Chart frame position in inches.
        categories: Category labels (x axis).
        series: Series name -> values; padded or truncated to the
            category count.
        design: DesignSystem for styling.
        colors: Optional series name -> hex color.

    Returns:
        The python-pptx Chart, or None when there are no categories.

    Raises:
        ValueError: If no series are given.
    """
    if not series:
        raise ValueError("add_chart needs at least one series")
    if not categories:
        return None

    chart_data = _build_category_chart_data(categories, series)
    graphic_frame = slide.shapes.add_chart(
        chart_type,
        Inches(position.left),
        Inches(position.top),
        Inches(position.width),
        Inches(position.height),
        chart_data,
    )
    chart = graphic_frame.chart

    colors = colors or {}
    plot = chart.plots[0]
    for idx, name in enumerate(series):
        color = colors.get(name)
        if color and idx < len(plot.series):
            plot_series = plot.series[idx]
            if chart_type == XL_CHART_TYPE.LINE:
                plot_series.format.line.color.rgb = hex_to_rgb(color)
            else:
                plot_series.format.fill.solid()
                plot_series.format.fill.fore_color.rgb = hex_to_rgb(color)

    _apply_chart_style(chart, design, legend=len(series) > 1)
    return chart


def add_sentiment_chart(slide, trend, position: Position,
                        design: DesignSystem) -> bool:
    """Line chart of daily sentiment and its rolling average.

    Returns True if the chart was added, False when the trend is empty.
    """
    points = getattr(trend, "points", None) or []
    if not points:
        return False
    series = {
        "Sentiment": [p.sentiment for p in points],
        "Rolling average": [p.rolling for p in points],
    }
    if any(p.industry_trend is not None for p in points):
        series["Industry trend"] = [p.industry_trend for p in points]
    chart = add_chart(
        slide, XL_CHART_TYPE.LINE, position,
        [p.date for p in points], series, design,
        colors={
            "Sentiment": design.primary,
            "Rolling average": design.positive,
            "Industry trend": design.neutral,
        },
    )
    if chart is None:
        return False
    # one marker per day, colored by the sign of that day's score
    sentiment_series = chart.plots[0].series[0]
    for idx, point in enumerate(points):
        marker = sentiment_series.points[idx].marker
        marker.style = XL_MARKER_STYLE.CIRCLE
        marker.format.fill.solid()
        marker.format.fill.fore_color.rgb = hex_to_rgb(line_color(point.sentiment))
    return True


def add_source_chart(slide, sources_df, position: Position,
                     design: DesignSystem) -> bool:
    """Stacked bar chart of tonality counts per media source.

    Returns True if the chart was added, False when there are no rows.
    """
    if sources_df is None or sources_df.empty:
        return False
    series = {
        name.capitalize(): sources_df[name].tolist()
        for name in ("positive", "neutral", "negative", "mixed")
    }
    chart = add_chart(
        slide, XL_CHART_TYPE.BAR_STACKED, position,
        [str(s) for s in sources_df["source"]], series, design,
        colors={
            "Positive": design.positive,
            "Neutral": design.neutral,
            "Negative": design.negative,
            "Mixed": design.mixed,
        },
    )
    return chart is not None
