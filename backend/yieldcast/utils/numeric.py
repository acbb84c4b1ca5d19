# yieldcast/utils/numeric.py
from __future__ import annotations

import math
from typing import Any, Optional, Union

Number = Union[int, float]


def coerce_float(value: Any) -> Optional[float]:
    """
    Best-effort float conversion that returns None when the value cannot be parsed.
    """
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def finite_or_none(value: Any) -> Optional[float]:
    """Map NaN/inf (including numpy floats) to None for JSON output."""
    num = coerce_float(value)
    if num is None or not math.isfinite(num):
        return None
    return num


def within(value: Number, low: Number, high: Number) -> bool:
    return low <= value <= high


__all__ = ["coerce_float", "finite_or_none", "within"]
