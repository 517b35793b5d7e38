"""Tests for labels, display formatting, view models and the loaders."""

import json
import math
from datetime import date, datetime

import pytest
import yaml

from media_report.schema.design_system import (
    format_currency,
    format_long_date,
    format_month_year,
    format_number,
    format_total,
    sentiment_color,
)
from media_report.schema.labels import (
    has_module_label,
    media_type_label,
    module_label,
    resolve_media_type,
)
from media_report.schema.loader import (
    load_config,
    load_document,
    load_organization,
    load_report,
    save_config,
)
from media_report.schema.models import (
    Contents,
    ContentsRow,
    ContentsSection,
    CoverDetails,
    DeckConfig,
    DesignSystem,
    PageEntry,
    page_key,
)


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

class TestLabels:

    def test_module_label(self):
        assert module_label("executiveSummary") == "Executive Summary"
        assert module_label("esgAnalysis") == "ESG Analysis"
        assert module_label("customModule") == "customModule"

    def test_module_label_override(self):
        assert module_label("topSources", {"topSources": "Sources"}) == "Sources"

    def test_media_type_label(self):
        assert media_type_label("posts") == "Social Media"
        assert media_type_label("printmedia") == "Print Media"
        assert media_type_label("radio") == "radio"
        assert media_type_label("posts", {"posts": "Social"}) == "Social"

    def test_has_module_label(self):
        assert has_module_label("wordCloud")
        assert not has_module_label("customModule")
        assert has_module_label("customModule", {"customModule": "Custom"})

    def test_resolve_media_type(self):
        assert resolve_media_type("printMedia") == "printmedia"
        assert resolve_media_type("social") == "posts"
        assert resolve_media_type("online") == "articles"
        assert resolve_media_type("radio") == "radio"


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatting:

    @pytest.mark.parametrize("value, expected", [
        (0, "0"),
        (12345, "12,345"),
        (1234.5, "1,234.5"),
        (1.23456, "1.235"),
        (2.0, "2"),
        (-1500, "-1,500"),
        (None, "N/A"),
        (math.nan, "N/A"),
    ])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    def test_format_total(self):
        assert format_total(0) == "-"
        assert format_total(None) == "-"
        assert format_total(1200) == "1,200"

    def test_format_currency(self):
        assert format_currency(45000) == "BWP 45,000"
        assert format_currency(10.5, "USD") == "USD 10.5"
        assert format_currency(None) == "N/A"

    def test_dates(self):
        assert format_long_date(date(2024, 9, 5)) == "September 5, 2024"
        assert format_month_year(datetime(2024, 9, 5, 10, 0)) == "September 2024"

    def test_sentiment_color(self):
        assert sentiment_color(1) == "#10B981"
        assert sentiment_color(-1) == "#EF4444"
        assert sentiment_color(0) == "#9CA3AF"
        assert sentiment_color(None) == "#9CA3AF"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class TestModels:

    def test_page_entry_round_trip(self):
        entry = PageEntry("posts", "topSources", 4)
        assert entry.key == page_key("posts", "topSources") == "posts:topSources"
        assert PageEntry.from_dict(entry.to_dict()) == entry

    def test_page_entry_without_page(self):
        assert PageEntry("posts", "topSources").to_dict() == {
            "mediaType": "posts", "module": "topSources",
        }

    def test_contents_rows_order(self):
        exec_row = ContentsRow("articles", "executiveSummary", "Executive Summary", 3)
        other = ContentsRow("posts", "topSources", "Top Sources", 4)
        contents = Contents(
            executive=[exec_row],
            sections=[ContentsSection("posts", "Social Media", [other])],
        )
        assert contents.rows() == [exec_row, other]
        assert not contents.is_empty()
        assert contents.to_dict()["sections"][0]["rows"][0]["page"] == 4

    def test_cover_to_dict_omits_missing_logo(self):
        assert "logo_url" not in CoverDetails().to_dict()
        assert CoverDetails(logo_url="https://cdn/logo.png").to_dict()["logo_url"] == (
            "https://cdn/logo.png"
        )

    def test_design_system_partial_dict(self):
        design = DesignSystem.from_dict({"colors": {"primary": "#000000"}})
        assert design.primary == "#000000"
        assert design.positive == DesignSystem().positive

    def test_deck_config_round_trip(self):
        config = DeckConfig(
            name="Quarterly",
            width_inches=10.0,
            module_labels={"customModule": "Custom"},
            media_type_labels={"posts": "Social"},
        )
        restored = DeckConfig.from_dict(config.to_dict())
        assert restored == config

    def test_deck_config_defaults(self):
        config = DeckConfig.from_dict({})
        assert config.width_inches == 13.333
        assert config.module_labels == {}
        assert config.copyright_holder == "Social Light Botswana"


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

class TestLoaders:

    def test_config_yaml_round_trip(self, tmp_path):
        path = tmp_path / "config" / "deck.yaml"
        config = DeckConfig(module_labels={"customModule": "Custom"})
        save_config(config, path)
        assert path.exists()
        assert yaml.safe_load(path.read_text())["module_labels"] == {"customModule": "Custom"}
        assert load_config(path) == config

    def test_empty_config_file(self, tmp_path):
        path = tmp_path / "deck.yaml"
        path.write_text("")
        assert load_config(path) == DeckConfig()

    def test_load_json_report(self, tmp_path):
        path = tmp_path / "report.json"
        path.write_text(json.dumps({"title": "September"}))
        assert load_report(path) == {"title": "September"}

    def test_load_yaml_organization(self, tmp_path):
        path = tmp_path / "org.yml"
        path.write_text("alias: BTC\norganizationName: Botswana Telecoms\n")
        assert load_organization(path)["alias"] == "BTC"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_document(tmp_path / "missing.json")

    def test_non_mapping_document(self, tmp_path):
        path = tmp_path / "report.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="expected an object"):
            load_report(path)
