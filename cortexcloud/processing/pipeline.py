"""Single-pass analysis pipeline over one uploaded table."""

import random

from cortexcloud.core.schemas import AnalysisResult, AnalysisSummary

from .anomalies import detect_anomalies
from .charts import DEFAULT_CHART_POINTS, sample_chart
from .insights import synthesize
from .parsers import CSV_CONTENT_TYPE, parse_table
from .predictions import predict
from .stats import compute_statistics
from .trends import detect_trends


def analyze_table(
    raw_content: str,
    columns: list[str],
    *,
    content_type: str = CSV_CONTENT_TYPE,
    rng: random.Random | None = None,
    chart_points: int = DEFAULT_CHART_POINTS,
) -> AnalysisResult:
    """Run parsing, statistics, trends, predictions, anomalies and insights.

    Statistical fields are a pure function of the input. Trend confidence,
    predictions, the completeness score and the chart's predicted series
    draw from ``rng``; pass a seeded ``random.Random`` for repeatable output.
    """
    rng = rng or random.Random()
    table = parse_table(raw_content, columns, content_type)
    numeric = table.numeric_columns

    statistics = compute_statistics(numeric, table.values)
    trends = detect_trends(numeric, table.values, table.data_rows, len(columns), rng)
    predictions = predict(numeric, table.values, rng)
    anomalies = detect_anomalies(numeric, table.values)
    insights = synthesize(table.data_rows, len(columns), numeric, table.values, predictions, rng)
    chart = sample_chart(table.data_rows, numeric, table.values, rng, points=chart_points)

    return AnalysisResult(
        summary=AnalysisSummary(
            total_rows=table.data_rows,
            total_columns=len(columns),
            numeric_columns=len(numeric),
            categorical_columns=len(columns) - len(numeric),
        ),
        statistics=statistics,
        trends=trends,
        predictions=predictions,
        anomalies=anomalies,
        insights=insights,
        chart_data=chart,
    )
