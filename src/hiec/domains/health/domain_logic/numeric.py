"""Small numeric helpers shared by the engine modules."""

from __future__ import annotations

import math
from typing import Any, Iterable


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    """Clamp a value to [lo, hi]."""
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def round_tenth(value: float) -> float:
    return round_half_up(value * 10) / 10


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) and math.isfinite(value)


def coerce_number(val: Any, default: float | None = 0.0) -> float | None:
    """Safely convert to float, returning default for None, NaN or non-numeric."""
    if val is None or isinstance(val, bool):
        return default
    try:
        number = float(val)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def mean_of(values: Iterable[float]) -> float:
    """Arithmetic mean; 0.0 for an empty iterable."""
    items = list(values)
    if not items:
        return 0.0
    return sum(items) / len(items)
