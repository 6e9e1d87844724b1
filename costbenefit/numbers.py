"""Small numeric helpers shared by the formulas and risk factors."""

from __future__ import annotations

import math


def safe_ratio(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Return numerator / denominator, or ``default`` when the denominator is 0."""
    if denominator == 0:
        return default
    return numerator / denominator


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    ``round()`` uses banker's rounding (``round(22.5) == 22``), which is not
    what users expect from a displayed score.
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    return min(upper, max(lower, value))
