import random
from collections.abc import Callable

from cortexcloud.processing.predictions import predict, predict_column


def test_predict_column_with_fixed_growth(fixed_random: Callable[[float], random.Random]) -> None:
    prediction = predict_column("revenue", [80, 90, 100], fixed_random(0.5))

    assert prediction.metric == "revenue"
    assert prediction.current_value == 100
    assert prediction.predicted_value == 105
    assert prediction.change == 5
    assert prediction.timeframe == "Next Period"


def test_predict_column_lowest_growth(fixed_random: Callable[[float], random.Random]) -> None:
    prediction = predict_column("revenue", [100], fixed_random(0.0))

    assert prediction.predicted_value == 90
    assert prediction.change == -10


def test_predict_limits_to_three_columns(rng: random.Random) -> None:
    columns = ["a", "b", "c", "d"]
    values = {column: [1.0, 2.0] for column in columns}

    predictions = predict(columns, values, rng)

    assert [prediction.metric for prediction in predictions] == ["a", "b", "c"]


def test_predict_without_numeric_columns(rng: random.Random) -> None:
    assert predict([], {}, rng) == []


def test_prediction_bounds_across_seeds() -> None:
    for seed in range(100):
        prediction = predict_column("a", [3.0, 200.0], random.Random(seed))
        assert prediction.current_value == 200
        assert 180 - 0.005 <= prediction.predicted_value <= 240 + 0.005
        assert -10 <= prediction.change <= 20


def test_prediction_serializes_camel_case(rng: random.Random) -> None:
    payload = predict_column("a", [1.0], rng).model_dump(by_alias=True)

    assert set(payload) == {"metric", "currentValue", "predictedValue", "change", "timeframe"}


def test_predict_column_reports_trailing_zero_as_current(
    fixed_random: Callable[[float], random.Random],
) -> None:
    prediction = predict_column("revenue", [10, 20, 0], fixed_random(0.5))

    assert prediction.current_value == 0
    assert prediction.predicted_value == 0
