"""Half-over-half trend labelling for the primary numeric column."""

import math
import random
from collections.abc import Mapping, Sequence

from cortexcloud.core.schemas import TrendFinding

from .numbers import mean, round_half_up

UPWARD_THRESHOLD = 1.1
DOWNWARD_THRESHOLD = 0.9


def _percent(ratio_change: float, first_mean: float) -> str:
    """Format a whole-number percentage, or nothing when the base is zero."""
    percent = round_half_up(ratio_change * 100)
    if first_mean == 0 or not math.isfinite(percent):
        return ""
    return f" of {int(percent)}%"


def _primary_trend(column: str, values: Sequence[float], rng: random.Random) -> TrendFinding:
    split = len(values) // 2
    first_mean = mean(values[:split])
    second_mean = mean(values[split:])

    # NaN comparisons are false, so a one-value column falls through to stable.
    if second_mean > first_mean * UPWARD_THRESHOLD:
        ratio = second_mean / first_mean - 1 if first_mean else 0.0
        return TrendFinding(
            type="Upward Trend",
            description=(
                f"{column} shows consistent growth{_percent(ratio, first_mean)} "
                "over the dataset period"
            ),
            confidence=85 + rng.randint(0, 9),
        )

    if second_mean < first_mean * DOWNWARD_THRESHOLD:
        ratio = 1 - second_mean / first_mean if first_mean else 0.0
        return TrendFinding(
            type="Downward Trend",
            description=(
                f"{column} shows a decline{_percent(ratio, first_mean)} over the dataset period"
            ),
            confidence=82 + rng.randint(0, 9),
        )

    return TrendFinding(
        type="Stable Pattern",
        description=f"{column} maintains relatively stable values with minor fluctuations",
        confidence=78 + rng.randint(0, 14),
    )


def detect_trends(
    numeric_columns: Sequence[str],
    values: Mapping[str, Sequence[float]],
    total_rows: int,
    total_columns: int,
    rng: random.Random,
) -> list[TrendFinding]:
    """Label the dataset's direction and add fixed descriptive findings.

    The correlation finding only names the first two numeric columns; no
    correlation coefficient is computed.
    """
    trends: list[TrendFinding] = []
    if numeric_columns:
        primary = numeric_columns[0]
        trends.append(_primary_trend(primary, values[primary], rng))

    categorical = total_columns - len(numeric_columns)
    trends.append(
        TrendFinding(
            type="Data Distribution",
            description=(
                f"Dataset contains {total_rows} records with {len(numeric_columns)} numeric "
                f"and {categorical} categorical columns"
            ),
            confidence=100,
        )
    )

    if len(numeric_columns) >= 2:
        trends.append(
            TrendFinding(
                type="Correlation Detected",
                description=(
                    "Potential correlation identified between "
                    f"{numeric_columns[0]} and {numeric_columns[1]}"
                ),
                confidence=70 + rng.randint(0, 19),
            )
        )
    return trends
