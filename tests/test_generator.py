"""Tests for the PPTX deck builder and chart helpers.

Builds decks in memory and reads them back with python-pptx.
"""

import io

import pandas as pd
import pytest
from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.chart import XL_CHART_TYPE
from pptx.util import Inches

from media_report.generator.charts import (
    _safe_value,
    add_chart,
    add_sentiment_chart,
    add_source_chart,
    hex_to_rgb,
)
from media_report.generator.deck_builder import (
    CONTENTS_TITLE,
    COVER_TITLE,
    PLACEHOLDER_TEXT,
    VOLUME_FOOTNOTE,
    DeckBuilder,
    _cell_text,
    build_deck,
    records_frame,
)
from media_report.processor.modules import SentimentTrendData
from media_report.processor.sentiment import SentimentPoint
from media_report.processor.view import ReportView
from media_report.qa.validator import all_text_on_slide
from media_report.schema.labels import module_label
from media_report.schema.models import DeckConfig, DesignSystem, Position


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def design():
    return DesignSystem()


@pytest.fixture
def blank_slide():
    prs = Presentation()
    return prs.slides.add_slide(prs.slide_layouts[6])


@pytest.fixture
def report():
    return {
        "title": "September Coverage",
        "createdAt": "2024-10-02",
        "scope": ["Botswana"],
        "startDate": "2024-09-01",
        "endDate": "2024-09-30",
        "modules": {
            "articles": {"topSources": True, "mediaSummary": True},
            "posts": {"wordCloud": True, "customModule": True},
        },
        "executiveSummary": {
            "overallSentiment": "positive",
            "totalMentions": 1200,
            "topThemes": ["Network", "Pricing"],
            "keyInsights": ["Coverage rose after the 5G launch"],
        },
        "articles": {
            "mediaSummary": {"volume": 1000, "reach": 250000, "ave": 45000},
            "topSources": [
                {"source": "Mmegi", "positive": 4, "neutral": 2, "negative": 1},
                {"source": "Sunday Standard", "negative": 3},
            ],
            "sentimentTrend": [
                {"date": "2024-09-01", "sentiment": 10, "rolling": 8, "volume": 12},
                {"date": "2024-09-02", "sentiment": -7, "rolling": 4, "volume": 5},
            ],
        },
        "posts": {
            "wordCloud": [{"word": "network", "count": 40}, {"word": "price", "count": 12}],
        },
    }


@pytest.fixture
def view(report):
    return ReportView(report, {"alias": "BTC"})


@pytest.fixture
def prs(view):
    return Presentation(io.BytesIO(DeckBuilder().build(view)))


def _slide_for(view, prs, media_type, module):
    page = view.page_index.page_for(media_type, module)
    return prs.slides[page - 1]


def _charts(slide):
    return [s.chart for s in slide.shapes if getattr(s, "has_chart", False) and s.has_chart]


def _tables(slide):
    return [s.table for s in slide.shapes if getattr(s, "has_table", False) and s.has_table]


def _run_color(slide, text):
    for shape in slide.shapes:
        if not shape.has_text_frame:
            continue
        for paragraph in shape.text_frame.paragraphs:
            for run in paragraph.runs:
                if text in run.text:
                    return run.font.color.rgb
    return None


def _build(report, organization=None):
    view = ReportView(report, organization)
    return view, Presentation(io.BytesIO(DeckBuilder().build(view)))


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------

class TestChartHelpers:

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#3175B6") == RGBColor(0x31, 0x75, 0xB6)
        assert hex_to_rgb("2e3e8a") == RGBColor(0x2E, 0x3E, 0x8A)

    @pytest.mark.parametrize("value, expected", [
        (3, 3.0), (2.5, 2.5), (None, 0.0), (float("nan"), 0.0), ("7", 0.0),
    ])
    def test_safe_value(self, value, expected):
        assert _safe_value(value) == expected

    def test_add_chart_requires_series(self, blank_slide, design):
        with pytest.raises(ValueError):
            add_chart(blank_slide, XL_CHART_TYPE.LINE, Position(0, 0, 4, 3),
                      ["a"], {}, design)

    def test_add_chart_without_categories(self, blank_slide, design):
        result = add_chart(blank_slide, XL_CHART_TYPE.LINE, Position(0, 0, 4, 3),
                           [], {"s": []}, design)
        assert result is None
        assert _charts(blank_slide) == []

    def test_series_padded_to_categories(self, blank_slide, design):
        chart = add_chart(blank_slide, XL_CHART_TYPE.BAR_STACKED, Position(0, 0, 4, 3),
                          ["a", "b", "c"], {"s": [1]}, design)
        assert list(chart.plots[0].series[0].values) == [1.0, 0.0, 0.0]

    def test_sentiment_chart(self, blank_slide, design):
        trend = SentimentTrendData(points=[
            SentimentPoint("2024-09-01", 10, 8, 12, 0, 0),
            SentimentPoint("2024-09-02", -7, 4, 0, 5, 0, industry_trend=2),
        ])
        assert add_sentiment_chart(blank_slide, trend, Position(0, 0, 8, 4), design)
        chart = _charts(blank_slide)[0]
        names = [s.name for s in chart.plots[0].series]
        assert names == ["Sentiment", "Rolling average", "Industry trend"]

    def test_sentiment_markers_colored_by_score(self, blank_slide, design):
        trend = SentimentTrendData(points=[
            SentimentPoint("2024-09-01", 10, 8, 12, 0, 0),
            SentimentPoint("2024-09-02", -7, 4, 0, 5, 0),
            SentimentPoint("2024-09-03", 0, 2, 0, 0, 3),
        ])
        add_sentiment_chart(blank_slide, trend, Position(0, 0, 8, 4), design)
        points = _charts(blank_slide)[0].plots[0].series[0].points
        colors = [points[i].marker.format.fill.fore_color.rgb for i in range(3)]
        assert colors == [
            RGBColor(0x10, 0xB9, 0x81), RGBColor(0xEF, 0x44, 0x44), RGBColor(0x9C, 0xA3, 0xAF),
        ]

    def test_sentiment_chart_empty(self, blank_slide, design):
        assert not add_sentiment_chart(blank_slide, SentimentTrendData(),
                                       Position(0, 0, 8, 4), design)

    def test_source_chart(self, blank_slide, design):
        df = pd.DataFrame({
            "source": ["Mmegi"], "positive": [4], "neutral": [2],
            "negative": [1], "mixed": [0], "total": [7],
        })
        assert add_source_chart(blank_slide, df, Position(0, 0, 8, 4), design)
        chart = _charts(blank_slide)[0]
        assert chart.chart_type == XL_CHART_TYPE.BAR_STACKED
        assert len(chart.plots[0].series) == 4

    def test_source_chart_empty(self, blank_slide, design):
        assert not add_source_chart(blank_slide, pd.DataFrame(), Position(0, 0, 8, 4), design)


# ---------------------------------------------------------------------------
# Table helpers
# ---------------------------------------------------------------------------

class TestTableHelpers:

    @pytest.mark.parametrize("value, expected", [
        (None, ""),
        (True, "Yes"),
        (1234, "1,234"),
        (["a", 2], "a, 2"),
        ({"k": 1}, "k: 1"),
        ("text", "text"),
    ])
    def test_cell_text(self, value, expected):
        assert _cell_text(value) == expected

    def test_records_frame_limits_columns(self):
        df = records_frame([{f"c{i}": i for i in range(9)}, "skip"])
        assert df.shape == (1, 6)


# ---------------------------------------------------------------------------
# DeckBuilder
# ---------------------------------------------------------------------------

class TestDeckBuilder:

    def test_one_slide_per_page(self, view, prs):
        assert len(prs.slides) == view.total_pages

    def test_slide_size(self, prs):
        assert prs.slide_width == Inches(13.333)
        assert prs.slide_height == Inches(7.5)

    def test_custom_slide_size(self, view):
        config = DeckConfig(width_inches=10.0, height_inches=5.625)
        prs = Presentation(io.BytesIO(DeckBuilder(config).build(view)))
        assert prs.slide_width == Inches(10.0)

    def test_cover(self, prs):
        text = all_text_on_slide(prs.slides[0])
        assert COVER_TITLE in text
        assert "Prepared for BTC" in text
        assert "October 2, 2024" in text

    def test_contents_slide(self, view, prs):
        text = all_text_on_slide(prs.slides[1])
        assert CONTENTS_TITLE in text
        assert VOLUME_FOOTNOTE in text
        assert "1. Executive Summary ........ 3" in text
        assert "Online Media" in text
        assert "Social Media" in text
        for row in view.contents.rows():
            assert f"{row.label} ........ {row.page}" in text

    def test_contents_report_data_table(self, view, prs):
        table = _tables(prs.slides[1])[0]
        assert table.cell(0, 0).text == "Report Data"
        cells = [table.cell(r, 1).text for r in range(1, 6)]
        assert cells == [
            view.summary.volume, "Botswana", "250,000", "English", "September 2024",
        ]

    def test_module_titles(self, view, prs):
        for entry in view.page_index.ordered_modules:
            text = all_text_on_slide(prs.slides[entry.page - 1])
            assert module_label(entry.module) in text
            assert str(entry.page) in text.splitlines()

        text = all_text_on_slide(_slide_for(view, prs, "articles", "topSources"))
        assert "Online Media" in text
        assert "Top Sources" in text

    def test_executive_summary(self, view, prs):
        text = all_text_on_slide(_slide_for(view, prs, "articles", "executiveSummary"))
        assert "Positive" in text
        assert "1,200" in text
        assert "Coverage rose after the 5G launch" in text

    def test_media_summary(self, view, prs):
        text = all_text_on_slide(_slide_for(view, prs, "articles", "mediaSummary"))
        assert "BWP 45,000" in text
        assert "250,000" in text

    def test_sentiment_trend_chart(self, view, prs):
        slide = _slide_for(view, prs, "articles", "sentimentTrend")
        assert len(_charts(slide)) == 1

    def test_top_sources(self, view, prs):
        slide = _slide_for(view, prs, "articles", "topSources")
        assert len(_charts(slide)) == 1
        table = _tables(slide)[0]
        assert table.cell(0, 0).text == "Source"
        assert table.cell(1, 0).text == "Mmegi"

    def test_generic_records_table(self, view, prs):
        slide = _slide_for(view, prs, "posts", "wordCloud")
        table = _tables(slide)[0]
        assert table.cell(0, 0).text == "word"
        assert table.cell(1, 1).text == "40"

    def test_placeholder_for_missing_data(self, view, prs):
        text = all_text_on_slide(_slide_for(view, prs, "posts", "customModule"))
        assert PLACEHOLDER_TEXT in text
        assert "customModule" in text

    def test_config_label_overrides(self, view):
        config = DeckConfig(module_labels={"customModule": "Custom Insights"})
        prs = Presentation(io.BytesIO(build_deck(view, config)))
        text = all_text_on_slide(_slide_for(view, prs, "posts", "customModule"))
        assert "Custom Insights" in text

    def test_minimal_report(self):
        view = ReportView({})
        prs = Presentation(io.BytesIO(build_deck(view)))
        assert len(prs.slides) == 4
        text = all_text_on_slide(prs.slides[3])
        assert "No sentiment data available" in text

    def test_build_to_file(self, view, tmp_path):
        path = tmp_path / "report.pptx"
        DeckBuilder().build_to_file(view, path)
        assert len(Presentation(str(path)).slides) == view.total_pages


class TestLooseModuleData:

    def test_media_summary_coerces_strings(self):
        view, prs = _build({
            "modules": {"articles": {"mediaSummary": True}},
            "articles": {"mediaSummary": {"volume": "1.5", "reach": "2000", "ave": "abc"}},
        })
        text = all_text_on_slide(_slide_for(view, prs, "articles", "mediaSummary"))
        assert "1.5" in text.splitlines()
        assert "2,000" in text
        assert "BWP 0" in text

    def test_media_summary_nested_totals(self):
        view, prs = _build({
            "modules": {"articles": {"mediaSummary": True}},
            "articles": {"mediaSummary": {"totals": {"volume": "300", "reach": 4000, "ave": "12.5"}}},
        })
        text = all_text_on_slide(_slide_for(view, prs, "articles", "mediaSummary"))
        assert "300" in text.splitlines()
        assert "4,000" in text
        assert "BWP 12.5" in text

    def test_media_summary_total_mentions_fallback(self):
        view, prs = _build({
            "modules": {"articles": {"mediaSummary": True}},
            "articles": {"mediaSummary": {"totalMentions": "40"}},
        })
        text = all_text_on_slide(_slide_for(view, prs, "articles", "mediaSummary"))
        assert "40" in text.splitlines()

    def test_media_summary_unusable_values(self):
        view, prs = _build({
            "modules": {"articles": {"mediaSummary": True}},
            "articles": {"mediaSummary": {"volume": "n/a", "reach": None, "ave": {}}},
        })
        text = all_text_on_slide(_slide_for(view, prs, "articles", "mediaSummary"))
        assert "No media summary data available" in text

    def test_cover_with_short_and_invalid_gradients(self):
        view, prs = _build({}, {"gradientTop": "#fff", "gradientBottom": "not-a-color"})
        assert len(prs.slides) == view.total_pages
        assert view.cover.gradient_top == "#ffffff"
        assert view.cover.gradient_bottom == "#2e3e8a"

    def test_numeric_overall_sentiment_labelled(self):
        view, prs = _build({
            "executiveSummary": {"overallSentiment": 0.9, "totalMentions": "75"},
        })
        slide = _slide_for(view, prs, "articles", "executiveSummary")
        text = all_text_on_slide(slide)
        assert "Positive" in text.splitlines()
        assert "75" in text.splitlines()
        assert _run_color(slide, "Positive") == RGBColor(0x10, 0xB9, 0x81)

    def test_annotation_lines_colored_by_spike_type(self):
        view, prs = _build({
            "articles": {
                "sentimentTrend": [{"date": "2024-09-01", "sentiment": 3, "rolling": 2}],
                "sentimentTrendAnnotations": [
                    {"date": "2024-09-01", "type": "negative spike", "summary": "Network outage"},
                    {"date": "2024-09-02", "type": "positive spike", "summary": "5G launch"},
                ],
            },
        })
        slide = _slide_for(view, prs, "articles", "sentimentTrend")
        assert _run_color(slide, "Network outage") == RGBColor(0xEF, 0x44, 0x44)
        assert _run_color(slide, "5G launch") == RGBColor(0x10, 0xB9, 0x81)
