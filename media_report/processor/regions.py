"""Country normalization and region summaries for report scopes.

A report's ``scope`` is a free-form list of country names typed by users
or emitted by different producers ("usa", "U.S.", "Ivory Coast" ...).
Names are normalized through an alias table, classified into sub-regions
and continents, and collapsed into a short label for the contents page:
a single country, a short list, a region ("Southern Africa"), a continent
("Europe"), a ranked region mix ("West Africa + East Africa"), or
"Global".
"""

from types import MappingProxyType


# ---------------------------------------------------------------------------
# Alias table
# ---------------------------------------------------------------------------

COUNTRY_ALIASES = MappingProxyType({
    "ivory coast": "Côte d'Ivoire",
    "cote d'ivoire": "Côte d'Ivoire",
    "côte d'ivoire": "Côte d'Ivoire",
    "côte d’ivoire": "Côte d'Ivoire",
    "drc": "DR Congo",
    "dr congo": "DR Congo",
    "d.r. congo": "DR Congo",
    "congo-kinshasa": "DR Congo",
    "congo (kinshasa)": "DR Congo",
    "democratic republic of congo": "DR Congo",
    "democratic republic of the congo": "DR Congo",
    "congo-brazzaville": "Republic of the Congo",
    "congo (brazzaville)": "Republic of the Congo",
    "congo republic": "Republic of the Congo",
    "congo": "Republic of the Congo",
    "usa": "United States",
    "us": "United States",
    "u.s.": "United States",
    "u.s.a.": "United States",
    "united states of america": "United States",
    "america": "United States",
    "uk": "United Kingdom",
    "u.k.": "United Kingdom",
    "great britain": "United Kingdom",
    "britain": "United Kingdom",
    "uae": "United Arab Emirates",
    "u.a.e.": "United Arab Emirates",
    "emirates": "United Arab Emirates",
    "swaziland": "Eswatini",
    "kingdom of eswatini": "Eswatini",
    "cape verde": "Cabo Verde",
    "the gambia": "Gambia",
    "sao tome and principe": "São Tomé and Príncipe",
    "burma": "Myanmar",
    "czech republic": "Czechia",
    "holland": "Netherlands",
    "the netherlands": "Netherlands",
    "russian federation": "Russia",
    "turkey": "Türkiye",
    "turkiye": "Türkiye",
    "macedonia": "North Macedonia",
    "korea": "South Korea",
    "republic of korea": "South Korea",
    "korea, republic of": "South Korea",
    "viet nam": "Vietnam",
    "lao pdr": "Laos",
    "east timor": "Timor-Leste",
    "tanzania, united republic of": "Tanzania",
    "united republic of tanzania": "Tanzania",
    "iran, islamic republic of": "Iran",
    "syrian arab republic": "Syria",
    "car": "Central African Republic",
    "ksa": "Saudi Arabia",
    "png": "Papua New Guinea",
})


def normalize_country(name: str) -> str:
    """Trim *name* and map known aliases onto a canonical country name.

    Unknown names are returned trimmed, with their original casing.
    """
    trimmed = str(name).strip()
    return COUNTRY_ALIASES.get(trimmed.lower(), trimmed)


# ---------------------------------------------------------------------------
# Classification tables
# ---------------------------------------------------------------------------

_AFRICAN_REGIONS = {
    "Southern Africa": (
        "Botswana", "South Africa", "Namibia", "Zimbabwe", "Zambia",
        "Lesotho", "Eswatini", "Mozambique", "Malawi", "Angola",
        "Madagascar", "Mauritius", "Comoros", "Seychelles",
    ),
    "East Africa": (
        "Kenya", "Tanzania", "Uganda", "Rwanda", "Burundi", "Ethiopia",
        "Somalia", "Djibouti", "Eritrea", "South Sudan",
    ),
    "West Africa": (
        "Nigeria", "Ghana", "Senegal", "Côte d'Ivoire", "Mali",
        "Burkina Faso", "Niger", "Guinea", "Guinea-Bissau", "Sierra Leone",
        "Liberia", "Togo", "Benin", "Gambia", "Cabo Verde", "Mauritania",
    ),
    "Central Africa": (
        "DR Congo", "Republic of the Congo", "Cameroon", "Gabon", "Chad",
        "Central African Republic", "Equatorial Guinea",
        "São Tomé and Príncipe",
    ),
    "North Africa": (
        "Egypt", "Libya", "Tunisia", "Algeria", "Morocco", "Sudan",
        "Western Sahara",
    ),
}

_OTHER_REGIONS = {
    "Western Europe": (
        "United Kingdom", "Ireland", "France", "Germany", "Netherlands",
        "Belgium", "Luxembourg", "Switzerland", "Austria", "Monaco",
        "Liechtenstein",
    ),
    "Northern Europe": (
        "Sweden", "Norway", "Denmark", "Finland", "Iceland", "Estonia",
        "Latvia", "Lithuania",
    ),
    "Southern Europe": (
        "Spain", "Portugal", "Italy", "Greece", "Malta", "Cyprus",
        "Croatia", "Slovenia", "Serbia", "Bosnia and Herzegovina",
        "Montenegro", "Albania", "North Macedonia", "Andorra",
        "San Marino",
    ),
    "Eastern Europe": (
        "Poland", "Czechia", "Slovakia", "Hungary", "Romania", "Bulgaria",
        "Ukraine", "Belarus", "Moldova", "Russia",
    ),
    "Middle East": (
        "Saudi Arabia", "United Arab Emirates", "Qatar", "Kuwait",
        "Bahrain", "Oman", "Yemen", "Israel", "Palestine", "Jordan",
        "Lebanon", "Syria", "Iraq", "Iran", "Türkiye",
    ),
    "South Asia": (
        "India", "Pakistan", "Bangladesh", "Sri Lanka", "Nepal", "Bhutan",
        "Maldives", "Afghanistan",
    ),
    "East Asia": (
        "China", "Japan", "South Korea", "North Korea", "Mongolia",
        "Taiwan", "Hong Kong",
    ),
    "Southeast Asia": (
        "Indonesia", "Malaysia", "Singapore", "Thailand", "Vietnam",
        "Philippines", "Myanmar", "Cambodia", "Laos", "Brunei",
        "Timor-Leste",
    ),
    "Central Asia": (
        "Kazakhstan", "Uzbekistan", "Turkmenistan", "Kyrgyzstan",
        "Tajikistan",
    ),
    "North America": ("United States", "Canada", "Mexico"),
    "Central America": (
        "Guatemala", "Belize", "Honduras", "El Salvador", "Nicaragua",
        "Costa Rica", "Panama",
    ),
    "Caribbean": (
        "Jamaica", "Cuba", "Haiti", "Dominican Republic", "Bahamas",
        "Barbados", "Trinidad and Tobago",
    ),
    "South America": (
        "Brazil", "Argentina", "Chile", "Colombia", "Peru", "Venezuela",
        "Ecuador", "Bolivia", "Paraguay", "Uruguay", "Guyana", "Suriname",
    ),
    "Oceania": (
        "Australia", "New Zealand", "Fiji", "Papua New Guinea", "Samoa",
        "Tonga", "Vanuatu", "Solomon Islands",
    ),
}

# Continent -> its sub-regions, in classification order.  Middle East
# countries classify into Asia.
_CONTINENT_REGIONS = {
    "Africa": tuple(_AFRICAN_REGIONS),
    "Europe": ("Western Europe", "Northern Europe", "Southern Europe", "Eastern Europe"),
    "Asia": ("Middle East", "South Asia", "East Asia", "Southeast Asia", "Central Asia"),
    "North America": ("North America", "Central America", "Caribbean"),
    "South America": ("South America",),
    "Oceania": ("Oceania",),
}

CONTINENTS = tuple(_CONTINENT_REGIONS)

# Sub-region -> countries.  "Africa" is the union of the African
# sub-regions and is never used as a sub-region summary.
REGIONS = MappingProxyType({
    **{name: frozenset(countries) for name, countries in _AFRICAN_REGIONS.items()},
    "Africa": frozenset().union(*_AFRICAN_REGIONS.values()),
    **{name: frozenset(countries) for name, countries in _OTHER_REGIONS.items()},
})

CONTINENT_COUNTRIES = MappingProxyType({
    continent: frozenset().union(*(REGIONS[r] for r in regions))
    for continent, regions in _CONTINENT_REGIONS.items()
})

_SUMMARY_REGIONS = tuple(name for name in REGIONS if name != "Africa")

# Case-insensitive lookup views
_REGIONS_LOWER = MappingProxyType({
    name: frozenset(c.lower() for c in countries) for name, countries in REGIONS.items()
})
_CONTINENTS_LOWER = MappingProxyType({
    name: frozenset(c.lower() for c in countries)
    for name, countries in CONTINENT_COUNTRIES.items()
})


def continent_of(country: str) -> str | None:
    """Continent of a normalized country name, or None when unknown."""
    key = country.lower()
    for continent, members in _CONTINENTS_LOWER.items():
        if key in members:
            return continent
    return None


def regions_of(country: str) -> list[str]:
    """Sub-regions (never "Africa") containing a normalized country name."""
    key = country.lower()
    return [name for name in _SUMMARY_REGIONS if key in _REGIONS_LOWER[name]]


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------

def _normalize_unique(countries) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for raw in countries or ():
        if raw is None:
            continue
        name = normalize_country(raw)
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())
        out.append(name)
    return out


def summarize_countries_to_region(countries, region_fallback: str | None = None) -> str:
    """Collapse a list of countries into a short region label.

    Examples:
        ["Botswana"]                              -> "Botswana"
        ["usa", "U.S.", "United States"]          -> "United States"
        ["Botswana", "France", "India"]           -> "Global"
        ["Botswana", "Namibia", "Zambia",
         "Zimbabwe", "Lesotho"]                   -> "Southern Africa"
    """
    if region_fallback and str(region_fallback).strip().lower() == "global":
        return "Global"

    names = _normalize_unique(countries)
    if not names:
        return region_fallback or "Global"
    if len(names) == 1:
        return names[0]

    continents = {continent_of(n) for n in names}
    known_continents = {c for c in continents if c is not None}
    if len(known_continents) >= 3:
        return "Global"

    if len(names) <= 4:
        return ", ".join(names)

    lowered = [n.lower() for n in names]
    containing = [
        region for region in _SUMMARY_REGIONS
        if all(n in _REGIONS_LOWER[region] for n in lowered)
    ]
    if len(containing) == 1:
        return containing[0]

    if None not in continents and len(known_continents) == 1:
        return next(iter(known_continents))

    counts = []
    for region in _SUMMARY_REGIONS:
        hits = sum(1 for n in lowered if n in _REGIONS_LOWER[region])
        if hits:
            counts.append((region, hits))
    if counts:
        counts.sort(key=lambda item: item[1], reverse=True)
        top = " + ".join(region for region, _ in counts[:2])
        remaining = len(counts) - 2
        if remaining > 0:
            return f"{top} + {remaining} more"
        return top

    head = ", ".join(names[:3])
    if len(names) > 3:
        return f"{head} + {len(names) - 3} more"
    return head
