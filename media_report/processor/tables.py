"""Tabular views over report data, built with pandas.

- ``media_breakdown``: volume / reach / AVE per media bucket plus a total
- ``top_sources``: the busiest media sources with their tonality split
"""

from typing import Any

import pandas as pd

from media_report.schema.labels import MEDIA_TYPES, media_type_label

from .coercion import to_num
from .modules import data_source, media_bucket
from .totals import sum_totals_from_report


BREAKDOWN_COLUMNS = ["label", "volume", "reach", "ave"]
SOURCE_COLUMNS = ["source", "positive", "neutral", "negative", "mixed", "total"]

_SOURCE_LIST_KEYS = ("items", "data", "sources", "list")


def media_breakdown(report: Any, labels: dict[str, str] | None = None) -> pd.DataFrame:
    """Aggregate totals for each media bucket of a report.

    Each bucket's subtree is aggregated independently; the ``Total`` row
    is the sum of the bucket rows.

    Returns:
        DataFrame indexed by media type (``articles`` .. ``posts``, then
        ``Total``) with columns label, volume, reach, ave.
    """
    source = data_source(report)
    rows = []
    for media_type in MEDIA_TYPES:
        totals = sum_totals_from_report(media_bucket(source, media_type))
        rows.append({
            "media_type": media_type,
            "label": media_type_label(media_type, labels),
            **totals.to_dict(),
        })
    df = pd.DataFrame(rows, columns=["media_type"] + BREAKDOWN_COLUMNS)
    df = df.set_index("media_type")
    df.loc["Total"] = [
        "All Media",
        df["volume"].sum(),
        df["reach"].sum(),
        df["ave"].sum(),
    ]
    return df


def _source_items(data: Any) -> list:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in _SOURCE_LIST_KEYS:
            candidate = data.get(key)
            if isinstance(candidate, list):
                return candidate
    return []


def top_sources(data: Any, limit: int = 10) -> pd.DataFrame:
    """Rank media sources by mention count.

    Accepts a list of source rows or an object holding one under
    ``items``, ``data``, ``sources`` or ``list``.  A row's ``total``
    defaults to the sum of its tonality counts; rows totalling 0 are
    dropped.
    """
    rows = []
    for item in _source_items(data):
        if not isinstance(item, dict):
            continue
        counts = {k: to_num(item.get(k)) for k in ("positive", "neutral", "negative", "mixed")}
        total = item.get("total")
        rows.append({
            "source": item.get("source") or item.get("name") or "Unknown",
            **counts,
            "total": to_num(total) if total is not None else sum(counts.values()),
        })

    df = pd.DataFrame(rows, columns=SOURCE_COLUMNS)
    if df.empty:
        return df
    df = df[df["total"] > 0]
    df = df.sort_values("total", ascending=False, kind="stable")
    return df.head(limit).reset_index(drop=True)
