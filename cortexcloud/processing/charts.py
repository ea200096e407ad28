"""Chart series sampling for the dashboard's actual-vs-predicted plot."""

import random
from collections.abc import Mapping, Sequence

from cortexcloud.core.schemas import ChartSeries

from .numbers import round2

DEFAULT_CHART_POINTS = 12


def sample_chart(
    data_rows: int,
    numeric_columns: Sequence[str],
    values: Mapping[str, Sequence[float]],
    rng: random.Random,
    points: int = DEFAULT_CHART_POINTS,
) -> ChartSeries:
    """Take the leading values of the first numeric column as the display series.

    Without a numeric column the series is random filler in [0, 100). The
    predicted series inflates each actual value by up to 20% and is drawn
    independently of the predictor's output.
    """
    count = min(points, data_rows)
    labels = [f"Point {index + 1}" for index in range(count)]
    if numeric_columns:
        actual = list(values[numeric_columns[0]][:points])
    else:
        actual = [rng.random() * 100 for _ in range(count)]
    predicted = [value * (1 + rng.random() * 0.2) for value in actual]

    return ChartSeries(
        labels=labels,
        values=[round2(value) for value in actual],
        predictions=[round2(value) for value in predicted],
    )
