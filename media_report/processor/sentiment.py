"""Sentiment trend normalization and sentiment label helpers."""

from dataclasses import dataclass
from typing import Any

from media_report.schema.design_system import sentiment_color

from .coercion import to_num


# A single volume is bucketed by sentiment score beyond this band
_NEUTRAL_BAND = 5

_CLASS_KEYS = ("positive", "negative", "neutral", "mixed")


@dataclass
class SentimentPoint:
    """One day of the sentiment trend series."""
    date: str
    sentiment: float
    rolling: float
    positive: float
    negative: float
    neutral: float
    industry_trend: float | None = None
    mixed: float | None = None


@dataclass
class SentimentAnnotation:
    """A spike marker on the sentiment trend chart."""
    date: str
    type: str
    category: str
    summary: str


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_num(value: Any) -> float | None:
    return None if value is None else to_num(value)


def to_sentiment_point(row: dict) -> SentimentPoint:
    """Convert a loose trend row into a SentimentPoint.

    Per-class volumes are used when the row has any of them; otherwise the
    row's single ``volume`` is placed in the class its sentiment score
    falls into.
    """
    row = row if isinstance(row, dict) else {}
    sentiment = to_num(row.get("sentiment"))

    if any(k in row for k in _CLASS_KEYS):
        positive = to_num(row.get("positive"))
        negative = to_num(row.get("negative"))
        neutral = to_num(row.get("neutral"))
    else:
        volume = to_num(row.get("volume"))
        positive = negative = neutral = 0
        if sentiment > _NEUTRAL_BAND:
            positive = volume
        elif sentiment < -_NEUTRAL_BAND:
            negative = volume
        else:
            neutral = volume

    return SentimentPoint(
        date=_text(row.get("date")),
        sentiment=sentiment,
        rolling=to_num(row.get("rolling")),
        positive=positive,
        negative=negative,
        neutral=neutral,
        industry_trend=_optional_num(row.get("industryTrend")),
        mixed=to_num(row["mixed"]) if "mixed" in row else None,
    )


def normalize_annotations(items: Any) -> list[SentimentAnnotation]:
    """Coerce annotation fields to strings; missing fields become ""."""
    out = []
    for item in items or []:
        item = item if isinstance(item, dict) else {}
        out.append(SentimentAnnotation(
            date=_text(item.get("date")),
            type=_text(item.get("type")),
            category=_text(item.get("category")),
            summary=_text(item.get("summary")),
        ))
    return out


def map_sentiment_to_label(score: float) -> str:
    """Bucket a numeric sentiment score into a tonality label."""
    if score >= 0.75:
        return "positive"
    if score <= -0.5:
        return "negative"
    if 0 < score < 0.5:
        return "mixed"
    return "neutral"


def spike_color(spike_type: str) -> str:
    """Marker color for a sentiment spike annotation."""
    t = (spike_type or "").lower()
    if "negative" in t:
        return "#ef4444"
    if "mixed" in t:
        return "#5d98ff"
    if "neutral" in t:
        return "#9ca3af"
    return "#10b981"


def line_color(sentiment: float) -> str:
    """Point color by sentiment sign."""
    return sentiment_color(sentiment, positive="#10b981", negative="#ef4444",
                           neutral="#9ca3af")
