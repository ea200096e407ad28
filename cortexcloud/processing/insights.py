"""Human-readable summary strings for an analysis run."""

import random
from collections.abc import Mapping, Sequence

from cortexcloud.core.schemas import PredictionRecord

from .numbers import format_number, round2, round_half_up


def synthesize(
    row_count: int,
    column_count: int,
    numeric_columns: Sequence[str],
    values: Mapping[str, Sequence[float]],
    predictions: Sequence[PredictionRecord],
    rng: random.Random,
) -> list[str]:
    """Return exactly four insight strings for the dashboard.

    The completeness score is synthetic: it is drawn from [85, 100] rather
    than computed from missing cells.
    """
    insights = [f"Your dataset contains {row_count} records across {column_count} columns"]

    if numeric_columns:
        primary = numeric_columns[0]
        primary_values = values[primary]
        spread = round2(max(primary_values) - min(primary_values))
        insights.append(f"{primary} has a range of {format_number(spread)}")
    else:
        insights.append("Dataset appears to be primarily categorical")

    completeness = int(round_half_up(85 + rng.random() * 15))
    insights.append(f"Data completeness score: {completeness}%")

    if predictions:
        first = predictions[0]
        direction = "increase" if first.change > 0 else "decrease"
        insights.append(
            f"Based on current trends, {first.metric} is projected to {direction} "
            f"by {format_number(abs(first.change))}%"
        )
    else:
        insights.append("Insufficient numeric data for predictions")

    return insights
