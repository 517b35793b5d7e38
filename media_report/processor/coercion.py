"""Primitive helpers for loosely-typed report data.

Report documents come from several producers and their numeric fields
may be numbers, numeric strings, null, or missing altogether.
"""

import math
import re
from typing import Any


_PREFIXED_INT = re.compile(r"^0([xob])([0-9a-f]+)$", re.IGNORECASE)
_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)(e[+-]?\d+)?$", re.IGNORECASE)


def to_num(value: Any) -> float | int:
    """Coerce a value to a finite number; anything unusable becomes 0.

    Examples:
        7 -> 7
        "7" -> 7.0
        " 1.5e3 " -> 1500.0
        "0x1A" -> 26
        "" / "abc" / None / {} / [] -> 0
        NaN / inf -> 0
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value if _is_finite(value) else 0
    if isinstance(value, str):
        return _parse_numeric_string(value)
    return 0


def _parse_numeric_string(text: str) -> float | int:
    s = text.strip()
    if not s:
        return 0
    prefixed = _PREFIXED_INT.match(s)
    if prefixed:
        base = {"x": 16, "o": 8, "b": 2}[prefixed.group(1).lower()]
        try:
            return int(prefixed.group(2), base)
        except ValueError:
            return 0
    if not _DECIMAL.match(s):
        return 0
    parsed = float(s)
    return parsed if _is_finite(parsed) else 0


def _is_finite(value: float | int) -> bool:
    return not (isinstance(value, float) and (math.isnan(value) or math.isinf(value)))


def is_object(value: Any) -> bool:
    """True for mappings and sequences that the tree walk may descend into."""
    return isinstance(value, (dict, list, tuple))


def is_mapping(value: Any) -> bool:
    return isinstance(value, dict)


def get_field(node: Any, key: str) -> Any:
    """Read ``node[key]`` from a mapping; anything else yields None."""
    if isinstance(node, dict):
        return node.get(key)
    return None


def get_path(node: Any, *keys: str) -> Any:
    """Follow a chain of mapping keys, returning None at the first gap."""
    for key in keys:
        node = get_field(node, key)
        if node is None:
            return None
    return node


def iter_children(node: Any):
    """Yield ``(key, child)`` pairs of a mapping or a sequence."""
    if isinstance(node, dict):
        yield from node.items()
    elif isinstance(node, (list, tuple)):
        yield from enumerate(node)
