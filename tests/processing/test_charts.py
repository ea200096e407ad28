import random
from collections.abc import Callable

from cortexcloud.processing.charts import sample_chart


def test_chart_takes_leading_values(fixed_random: Callable[[float], random.Random]) -> None:
    chart = sample_chart(3, ["a"], {"a": [1.0, 2.0, 3.0]}, fixed_random(0.5))

    assert chart.labels == ["Point 1", "Point 2", "Point 3"]
    assert chart.values == [1.0, 2.0, 3.0]
    assert chart.predictions == [1.1, 2.2, 3.3]


def test_chart_is_limited_to_twelve_points(rng: random.Random) -> None:
    values = [float(index) for index in range(20)]

    chart = sample_chart(20, ["a"], {"a": values}, rng)

    assert len(chart.labels) == 12
    assert chart.labels[-1] == "Point 12"
    assert chart.values == values[:12]
    assert len(chart.predictions) == 12


def test_chart_predictions_inflate_actual_values(rng: random.Random) -> None:
    values = [10.0, 20.0, 30.0, 40.0]

    chart = sample_chart(4, ["a"], {"a": values}, rng)

    for actual, predicted in zip(chart.values, chart.predictions, strict=True):
        assert actual <= predicted <= actual * 1.2 + 0.005


def test_chart_without_numeric_columns_uses_filler(
    fixed_random: Callable[[float], random.Random],
) -> None:
    chart = sample_chart(5, [], {}, fixed_random(0.5))

    assert len(chart.labels) == 5
    assert chart.values == [50.0] * 5
    assert chart.predictions == [55.0] * 5


def test_chart_custom_point_count(rng: random.Random) -> None:
    chart = sample_chart(10, ["a"], {"a": [1.0] * 10}, rng, points=4)

    assert len(chart.labels) == 4
    assert len(chart.values) == 4


def test_chart_serializes_camel_case(rng: random.Random) -> None:
    payload = sample_chart(1, [], {}, rng).model_dump(by_alias=True)

    assert set(payload) == {"labels", "values", "predictions"}
