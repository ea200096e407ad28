"""Z-score anomaly detection over the leading numeric columns."""

from collections.abc import Mapping, Sequence

from cortexcloud.core.schemas import AnomalyFinding, Severity

from .numbers import format_number, mean, population_stddev, round_half_up

MAX_ANOMALY_COLUMNS = 2
MAX_FINDINGS = 3
MEDIUM_SIGMA = 2.5
HIGH_SIGMA = 3.0
# Data rows are 1-indexed and the header occupies row 1.
ROW_OFFSET = 2

NO_ANOMALIES = AnomalyFinding(
    description="No significant anomalies detected in the dataset",
    severity=Severity.low,
)


def _scan_column(
    column: str,
    values: Sequence[float],
    limit: int,
) -> list[AnomalyFinding]:
    center = mean(values)
    spread = population_stddev(values)
    findings: list[AnomalyFinding] = []
    for index, value in enumerate(values):
        if len(findings) >= limit:
            break
        distance = abs(value - center)
        if distance <= MEDIUM_SIGMA * spread:
            continue
        sigma = round_half_up(distance / spread * 10) / 10
        findings.append(
            AnomalyFinding(
                description=(
                    f"Unusual value detected in {column} at row {index + ROW_OFFSET}: "
                    f"{format_number(value)} ({format_number(sigma)}σ from mean)"
                ),
                severity=Severity.high if distance > HIGH_SIGMA * spread else Severity.medium,
                column=column,
                value=value,
            )
        )
    return findings


def detect_anomalies(
    numeric_columns: Sequence[str],
    values: Mapping[str, Sequence[float]],
) -> list[AnomalyFinding]:
    """Flag values beyond 2.5 standard deviations, at most three overall.

    Columns are scanned in order and values in row order. When nothing is
    flagged a single low-severity "no anomalies" finding is returned.
    """
    findings: list[AnomalyFinding] = []
    for column in numeric_columns[:MAX_ANOMALY_COLUMNS]:
        remaining = MAX_FINDINGS - len(findings)
        if remaining <= 0:
            break
        findings.extend(_scan_column(column, values[column], remaining))

    return findings or [NO_ANOMALIES.model_copy()]
