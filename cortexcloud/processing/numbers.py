"""Rounding and formatting helpers shared by the analysis steps.

Dashboard numbers round half up (toward positive infinity), not with
Python's round-half-to-even.
"""

import math
from collections.abc import Sequence


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` to ``digits`` decimals, ties toward positive infinity."""
    factor = 10**digits
    scaled = value * factor
    # Overflowed sums and means pass through unrounded.
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor


def round2(value: float) -> float:
    return round_half_up(value, 2)


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; NaN for an empty sequence."""
    if not values:
        return math.nan
    return sum(values) / len(values)


def population_stddev(values: Sequence[float]) -> float:
    """Standard deviation dividing by N, not N - 1."""
    center = mean(values)
    return math.sqrt(sum((value - center) * (value - center) for value in values) / len(values))


def format_number(value: float) -> str:
    """Render a number the way the dashboard prints it: ``3`` not ``3.0``."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))
