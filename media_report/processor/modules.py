"""Module data resolution — finds the content behind one module page.

The content for a ``(mediaType, module)`` page lives on the report (or on
its ``formData`` overlay, which wins key by key) inside the media bucket
for that type.  The executive summary lives at the report root, and the
sentiment trend falls back to root-level series when its bucket has none.
"""

from dataclasses import dataclass, field
from typing import Any

from media_report.schema.labels import (
    EXECUTIVE_SUMMARY,
    MEDIA_TYPE_ALIASES,
    SENTIMENT_TREND,
    resolve_media_type,
)

from .coercion import get_field, is_mapping
from .sentiment import (
    SentimentAnnotation,
    SentimentPoint,
    normalize_annotations,
    to_sentiment_point,
)


@dataclass
class SentimentTrendData:
    """Resolved sentiment trend module content."""
    points: list[SentimentPoint] = field(default_factory=list)
    annotations: list[SentimentAnnotation] = field(default_factory=list)


def data_source(report: Any) -> dict:
    """The report overlaid with its ``formData`` object."""
    base = dict(report) if is_mapping(report) else {}
    form_data = base.get("formData")
    if is_mapping(form_data):
        base.update(form_data)
    return base


def media_bucket(source: dict, media_type: str) -> Any:
    """Bucket for *media_type*, also found under any of its alternate names."""
    canonical = resolve_media_type(media_type)
    if canonical in source:
        return source[canonical]
    for alias in MEDIA_TYPE_ALIASES:
        if alias in source and resolve_media_type(alias) == canonical:
            return source[alias]
    return None


def _first_list(*candidates) -> list:
    for candidate in candidates:
        if candidate is not None:
            return candidate if isinstance(candidate, list) else []
    return []


def resolve_module_data(report: Any, media_type: str, module: str) -> Any:
    """Content for one module page, or None when the report has none.

    Returns a :class:`SentimentTrendData` for the sentiment trend module
    and the raw module value for every other module.
    """
    source = data_source(report)
    bucket = media_bucket(source, media_type)

    if module == EXECUTIVE_SUMMARY:
        return source.get(EXECUTIVE_SUMMARY)

    if module == SENTIMENT_TREND:
        series = _first_list(get_field(bucket, "sentimentTrend"),
                             source.get("sentimentTrend"))
        annotations = _first_list(get_field(bucket, "sentimentTrendAnnotations"),
                                  source.get("sentimentTrendAnnotations"))
        return SentimentTrendData(
            points=[to_sentiment_point(row) for row in series],
            annotations=normalize_annotations(annotations),
        )

    return get_field(bucket, module)
