"""Static display labels for report modules and media types."""

EXECUTIVE_SUMMARY = "executiveSummary"
SENTIMENT_TREND = "sentimentTrend"
MEDIA_SUMMARY = "mediaSummary"

# The four media buckets, in their canonical order
MEDIA_TYPES = ("articles", "printmedia", "broadcast", "posts")

MODULE_LABELS: dict[str, str] = {
    "executiveSummary": "Executive Summary",
    "mediaSummary": "Media Summary",
    "sentimentTrend": "Sentiment Trend",
    "reputationalRisks": "Reputational Risks",
    "reputationalOpportunities": "Reputational Opportunities",
    "issueImpact": "Issue Impact",
    "topSources": "Top Sources",
    "wordCloud": "Word Cloud",
    "kpiPerformance": "KPI Performance",
    "topJournalists": "Top Journalists",
    "sectorialCompetitor": "Sectorial Competitor",
    "sectorialStakeholder": "Sectorial Stakeholder",
    "sectorRanking": "Sector Ranking",
    "issueVisibility": "Issue Visibility",
    "esgAnalysis": "ESG Analysis",
}

MEDIA_TYPE_LABELS: dict[str, str] = {
    "posts": "Social Media",
    "articles": "Online Media",
    "broadcast": "Broadcast Media",
    "printmedia": "Print Media",
}

# Alternate bucket names some report producers emit
MEDIA_TYPE_ALIASES: dict[str, str] = {
    "printMedia": "printmedia",
    "social": "posts",
    "online": "articles",
    "articles": "articles",
    "printmedia": "printmedia",
    "broadcast": "broadcast",
    "posts": "posts",
}


def module_label(module: str, overrides: dict[str, str] | None = None) -> str:
    """Display label for a module key, falling back to the raw key."""
    if overrides and module in overrides:
        return overrides[module]
    return MODULE_LABELS.get(module, module)


def media_type_label(media_type: str, overrides: dict[str, str] | None = None) -> str:
    """Display label for a media type key, falling back to the raw key."""
    if overrides and media_type in overrides:
        return overrides[media_type]
    return MEDIA_TYPE_LABELS.get(media_type, media_type)


def has_module_label(module: str, overrides: dict[str, str] | None = None) -> bool:
    return module in MODULE_LABELS or bool(overrides and module in overrides)


def resolve_media_type(media_type: str) -> str:
    """Map an alternate bucket name onto its canonical media type."""
    return MEDIA_TYPE_ALIASES.get(media_type, media_type)
