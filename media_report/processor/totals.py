"""Totals aggregator — sums volume, reach and AVE over a report tree.

Report producers attach totals at different nesting levels: directly on a
node (``{"volume": ..., "reach": ..., "ave": ...}``), under a nested
``totals`` object, or under a ``mediaSummary`` child of a media bucket.
The aggregator walks the whole tree and adds every summary-shaped node it
meets.

A node's ``mediaSummary`` child is consumed once, when its parent is
visited, and the walk never descends into it, so totals nested inside a
media summary are not counted a second time.  Sequences are walked like
mappings (their items are visited) but contribute nothing themselves.
"""

from typing import Any

from media_report.schema.models import Totals

from .coercion import get_field, is_mapping, is_object, iter_children, to_num


SUMMARY_KEYS = ("volume", "reach", "ave", "totals")
MEDIA_SUMMARY_KEY = "mediaSummary"


def read_fields(node: Any) -> Totals:
    """Read ``volume``/``reach``/``ave`` straight off *node* (missing -> 0)."""
    return Totals(
        volume=to_num(get_field(node, "volume")),
        reach=to_num(get_field(node, "reach")),
        ave=to_num(get_field(node, "ave")),
    )


def read_summary(node: Any) -> Totals:
    """Read a summary holder, preferring its nested ``totals`` object."""
    nested = get_field(node, "totals")
    if is_object(nested):
        return read_fields(nested)
    return read_fields(node)


def _self_totals(node: dict) -> Totals:
    nested = node.get("totals")
    if is_object(nested):
        return read_fields(nested)
    if any(key in node for key in SUMMARY_KEYS):
        return read_fields(node)
    return Totals()


def _walk(node: Any, acc: Totals) -> Totals:
    if not is_object(node):
        return acc

    if is_mapping(node):
        acc = acc + _self_totals(node)
        if MEDIA_SUMMARY_KEY in node:
            acc = acc + read_summary(node[MEDIA_SUMMARY_KEY])

    for key, child in iter_children(node):
        if key == MEDIA_SUMMARY_KEY:
            continue
        acc = _walk(child, acc)
    return acc


def sum_totals_from_report(root: Any) -> Totals:
    """Aggregate volume, reach and AVE over *root*.

    Never raises: non-object input (including None) yields zero totals and
    malformed numeric fields count as 0.

    Examples:
        {"mediaSummary": {"volume": 10},
         "other": {"mediaSummary": {"volume": 5}}}  -> volume 15
        {"volume": "7", "reach": None}              -> Totals(7.0, 0, 0)
    """
    return _walk(root, Totals())
