"""Tests for country normalization and region summaries."""

import pytest

from media_report.processor.regions import (
    CONTINENT_COUNTRIES,
    CONTINENTS,
    REGIONS,
    continent_of,
    normalize_country,
    regions_of,
    summarize_countries_to_region,
)


SOUTHERN_AFRICA = ["Botswana", "Namibia", "Zambia", "Zimbabwe", "Lesotho"]


# ---------------------------------------------------------------------------
# normalize_country
# ---------------------------------------------------------------------------

class TestNormalizeCountry:

    @pytest.mark.parametrize("raw, expected", [
        ("usa", "United States"),
        ("U.S.", "United States"),
        ("  uk ", "United Kingdom"),
        ("UAE", "United Arab Emirates"),
        ("Ivory Coast", "Côte d'Ivoire"),
        ("DRC", "DR Congo"),
        ("Swaziland", "Eswatini"),
        ("Cape Verde", "Cabo Verde"),
        ("Turkey", "Türkiye"),
    ])
    def test_aliases(self, raw, expected):
        assert normalize_country(raw) == expected

    def test_unknown_is_trimmed_and_kept(self):
        assert normalize_country("  Narnia ") == "Narnia"

    def test_canonical_name_unchanged(self):
        assert normalize_country("Botswana") == "Botswana"


# ---------------------------------------------------------------------------
# Classification tables
# ---------------------------------------------------------------------------

class TestClassification:

    def test_africa_is_union_of_subregions(self):
        subregions = ["Southern Africa", "East Africa", "West Africa",
                      "Central Africa", "North Africa"]
        union = frozenset().union(*(REGIONS[r] for r in subregions))
        assert REGIONS["Africa"] == union
        assert CONTINENT_COUNTRIES["Africa"] == union

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            REGIONS["Atlantis"] = frozenset()
        with pytest.raises(AttributeError):
            REGIONS["Southern Africa"].add("Atlantis")

    def test_continent_of(self):
        assert continent_of("Botswana") == "Africa"
        assert continent_of("france") == "Europe"
        assert continent_of("Saudi Arabia") == "Asia"
        assert continent_of("Narnia") is None

    def test_regions_of_excludes_africa(self):
        assert regions_of("Kenya") == ["East Africa"]
        assert regions_of("Narnia") == []

    def test_continents_listed(self):
        assert "Africa" in CONTINENTS
        assert "Europe" in CONTINENTS


# ---------------------------------------------------------------------------
# summarize_countries_to_region
# ---------------------------------------------------------------------------

class TestSummarizeCountries:

    def test_single_country(self):
        assert summarize_countries_to_region(["Botswana"]) == "Botswana"

    def test_aliases_deduplicate(self):
        assert summarize_countries_to_region(["usa", "U.S.", "United States"]) == "United States"

    def test_case_insensitive_dedupe_keeps_first_spelling(self):
        assert summarize_countries_to_region(["botswana", "Botswana"]) == "botswana"

    def test_three_continents_is_global(self):
        assert summarize_countries_to_region(["Botswana", "France", "India"]) == "Global"

    def test_short_list_joined(self):
        result = summarize_countries_to_region(["Botswana", "Kenya", "France"])
        assert result == "Botswana, Kenya, France"

    def test_four_names_still_joined(self):
        result = summarize_countries_to_region(["Botswana", "Namibia", "Zambia", "Zimbabwe"])
        assert result == "Botswana, Namibia, Zambia, Zimbabwe"

    def test_single_region(self):
        assert summarize_countries_to_region(SOUTHERN_AFRICA) == "Southern Africa"

    def test_single_continent(self):
        countries = ["Botswana", "Kenya", "Nigeria", "Ghana", "Egypt"]
        assert summarize_countries_to_region(countries) == "Africa"

    def test_two_regions_ranked(self):
        countries = ["Botswana", "Namibia", "Zambia", "France", "Germany"]
        assert summarize_countries_to_region(countries) == "Southern Africa + Western Europe"

    def test_more_regions_counted(self):
        countries = ["Botswana", "Namibia", "Zambia", "Kenya", "France"]
        result = summarize_countries_to_region(countries)
        assert result == "Southern Africa + East Africa + 1 more"

    def test_unknown_country_keeps_region_ranking(self):
        countries = ["Botswana", "Namibia", "Zambia", "Zimbabwe", "Atlantis"]
        assert summarize_countries_to_region(countries) == "Southern Africa"

    def test_all_unknown_falls_back_to_names(self):
        countries = ["Atlantis", "Lemuria", "Mu", "Hyperborea", "Thule"]
        assert summarize_countries_to_region(countries) == "Atlantis, Lemuria, Mu + 2 more"

    def test_empty_uses_fallback(self):
        assert summarize_countries_to_region([], "Southern Africa") == "Southern Africa"

    def test_empty_without_fallback_is_global(self):
        assert summarize_countries_to_region([]) == "Global"
        assert summarize_countries_to_region(None) == "Global"

    def test_global_fallback_wins(self):
        assert summarize_countries_to_region(["Botswana"], "global") == "Global"

    def test_ignores_none_and_blank_entries(self):
        assert summarize_countries_to_region([None, "  ", "Botswana"]) == "Botswana"
