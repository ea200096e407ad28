"""Descriptive statistics over parsed numeric columns."""

from collections.abc import Mapping, Sequence

from cortexcloud.core.schemas import StatisticsRecord

from .numbers import mean, population_stddev, round2

MAX_STATISTICS_COLUMNS = 5


def describe_column(column: str, values: Sequence[float]) -> StatisticsRecord:
    """Compute min, max, mean, median and population stddev for one column.

    The median is the upper-middle element for even-length input; the two
    middle values are not averaged.
    """
    ordered = sorted(values)
    return StatisticsRecord(
        column=column,
        min=ordered[0],
        max=ordered[-1],
        mean=round2(mean(values)),
        median=round2(ordered[len(ordered) // 2]),
        std_dev=round2(population_stddev(values)),
    )


def compute_statistics(
    numeric_columns: Sequence[str],
    values: Mapping[str, Sequence[float]],
) -> list[StatisticsRecord]:
    """Describe the first few numeric columns in parse order."""
    return [
        describe_column(column, values[column])
        for column in numeric_columns[:MAX_STATISTICS_COLUMNS]
    ]
