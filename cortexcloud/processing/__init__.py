"""Analysis helpers: table parsing, statistics, trends, predictions and anomalies."""

from .anomalies import detect_anomalies
from .charts import sample_chart
from .insights import synthesize
from .parsers import extract_metadata, parse_table
from .pipeline import analyze_table
from .predictions import predict
from .stats import compute_statistics
from .trends import detect_trends

__all__ = [
    "analyze_table",
    "compute_statistics",
    "detect_anomalies",
    "detect_trends",
    "extract_metadata",
    "parse_table",
    "predict",
    "sample_chart",
    "synthesize",
]
