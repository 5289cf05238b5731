"""Pearson correlation between two equal-length numeric series.

Never raises: empty input, unequal lengths, non-finite values and
zero-variance series all yield a neutral 0.0.
"""

from __future__ import annotations

import math
from typing import Sequence

from hiec.domains.health.domain_logic.numeric import clamp, is_finite_number


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Return the Pearson correlation coefficient of ``x`` and ``y`` in [-1, 1]."""
    n = len(x)
    if n == 0 or n != len(y):
        return 0.0
    if not all(is_finite_number(v) for v in x) or not all(is_finite_number(v) for v in y):
        return 0.0
    # Constant series have no variance; checked exactly to avoid float residue.
    if min(x) == max(x) or min(y) == max(y):
        return 0.0

    mean_x = math.fsum(x) / n
    mean_y = math.fsum(y) / n
    dx = [v - mean_x for v in x]
    dy = [v - mean_y for v in y]

    sxy = math.fsum(a * b for a, b in zip(dx, dy))
    sxx = math.fsum(a * a for a in dx)
    syy = math.fsum(b * b for b in dy)

    denominator = math.sqrt(sxx * syy)
    if denominator == 0:
        return 0.0
    return clamp(sxy / denominator, -1.0, 1.0)
