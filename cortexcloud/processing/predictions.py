"""Next-period projections by random multiplicative growth.

This is a placeholder forecast: the growth factor is drawn uniformly from
[0.9, 1.2) and does not depend on the detected trend.
"""

import random
from collections.abc import Mapping, Sequence

from cortexcloud.core.schemas import PredictionRecord

from .numbers import mean, round2, round_half_up

MAX_PREDICTION_COLUMNS = 3
TIMEFRAME = "Next Period"


def draw_growth_rate(rng: random.Random) -> float:
    return 1 + (rng.random() * 0.3 - 0.1)


def predict_column(column: str, values: Sequence[float], rng: random.Random) -> PredictionRecord:
    current = values[-1] if values else mean(values)
    growth_rate = draw_growth_rate(rng)
    return PredictionRecord(
        metric=column,
        current_value=round2(current),
        predicted_value=round2(current * growth_rate),
        change=round_half_up((growth_rate - 1) * 1000) / 10,
        timeframe=TIMEFRAME,
    )


def predict(
    numeric_columns: Sequence[str],
    values: Mapping[str, Sequence[float]],
    rng: random.Random,
) -> list[PredictionRecord]:
    """Project each of the first three numeric columns one period ahead."""
    return [
        predict_column(column, values[column], rng)
        for column in numeric_columns[:MAX_PREDICTION_COLUMNS]
    ]
