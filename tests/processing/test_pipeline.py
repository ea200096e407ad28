import math
import random

from cortexcloud.core.schemas import Severity
from cortexcloud.processing import analyze_table

SAMPLE_CSV = "a,b\n1,x\n2,y\n3,z\n4,w"


def test_analyze_table_end_to_end(rng: random.Random) -> None:
    result = analyze_table(SAMPLE_CSV, ["a", "b"], rng=rng)

    assert result.summary.total_rows == 4
    assert result.summary.total_columns == 2
    assert result.summary.numeric_columns == 1
    assert result.summary.categorical_columns == 1

    [record] = result.statistics
    assert (record.column, record.min, record.max) == ("a", 1, 4)
    assert (record.mean, record.median, record.std_dev) == (2.5, 3, 1.12)

    assert result.trends[0].type == "Upward Trend"
    assert result.trends[1].type == "Data Distribution"
    assert [prediction.metric for prediction in result.predictions] == ["a"]
    assert result.predictions[0].current_value == 4
    assert result.anomalies[0].severity == Severity.low
    assert len(result.insights) == 4
    assert result.insights[1] == "a has a range of 3"
    assert result.chart_data.values == [1, 2, 3, 4]


def test_analyze_table_serializes_dashboard_keys(rng: random.Random) -> None:
    payload = analyze_table(SAMPLE_CSV, ["a", "b"], rng=rng).model_dump(by_alias=True)

    assert set(payload) == {
        "summary",
        "statistics",
        "trends",
        "predictions",
        "anomalies",
        "insights",
        "chartData",
    }
    assert payload["summary"] == {
        "totalRows": 4,
        "totalColumns": 2,
        "numericColumns": 1,
        "categoricalColumns": 1,
    }
    assert "stdDev" in payload["statistics"][0]


def test_analyze_table_is_repeatable_with_same_seed() -> None:
    first = analyze_table(SAMPLE_CSV, ["a", "b"], rng=random.Random(7))
    second = analyze_table(SAMPLE_CSV, ["a", "b"], rng=random.Random(7))

    assert first == second


def test_analyze_table_categorical_only(rng: random.Random) -> None:
    result = analyze_table("name,city\nann,rome\nbob,oslo\n", ["name", "city"], rng=rng)

    assert result.summary.numeric_columns == 0
    assert result.statistics == []
    assert result.predictions == []
    assert [trend.type for trend in result.trends] == ["Data Distribution"]
    assert result.insights[1] == "Dataset appears to be primarily categorical"
    assert len(result.chart_data.values) == 2


def test_analyze_table_header_only(rng: random.Random) -> None:
    result = analyze_table("a,b\n", ["a", "b"], rng=rng)

    assert result.summary.total_rows == 0
    assert result.chart_data.labels == []
    assert len(result.insights) == 4


def test_analyze_table_json_records(rng: random.Random) -> None:
    payload = '[{"v": 1}, {"v": 2}, {"v": 3}]'

    result = analyze_table(payload, ["v"], content_type="application/json", rng=rng)

    assert result.summary.numeric_columns == 1
    assert result.statistics[0].mean == 2


def test_analyze_table_ignores_infinite_cells(rng: random.Random) -> None:
    result = analyze_table("a\n1\n2\ninf\n1e400\n3\n", ["a"], rng=rng)

    assert result.summary.numeric_columns == 1
    [record] = result.statistics
    assert (record.min, record.max, record.mean) == (1, 3, 2)
    assert result.chart_data.values == [1, 2, 3]


def test_analyze_table_survives_overflowing_sums(rng: random.Random) -> None:
    result = analyze_table("a\n1e308\n1e308\n", ["a"], rng=rng)

    [record] = result.statistics
    assert record.mean == math.inf
    assert record.max == 1e308
    assert result.anomalies[0].severity == Severity.low
    assert len(result.insights) == 4
