"""Normalization helpers.

Parsing of loosely typed JSON values from the layout and feed documents.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def is_number(value: Any) -> bool:
    """Return True for finite real numbers.

    ``bool`` is excluded even though it subclasses ``int``; NaN and
    infinities are excluded so they cannot poison an envelope.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (Mapping, list, tuple)):
        return None
    text = str(value)
    return text if text else None


def as_mapping(value: Any) -> dict[str, Any]:
    """Return *value* as a plain dict, or an empty dict when it is not a mapping."""
    if isinstance(value, Mapping):
        return dict(value)
    return {}
