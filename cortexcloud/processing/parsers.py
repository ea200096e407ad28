"""Parsers that turn uploaded CSV/JSON text into per-column numeric values."""

import json
import math
import re
from dataclasses import dataclass, field
from typing import Any

CSV_CONTENT_TYPE = "text/csv"
JSON_CONTENT_TYPE = "application/json"
# Share of data rows that must hold a number for a column to count as numeric.
NUMERIC_COVERAGE_THRESHOLD = 0.5
# Leading decimal number of a cell; trailing text such as units is ignored.
LEADING_NUMBER = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class InvalidDatasetFormatError(ValueError):
    """Raised when an uploaded dataset has invalid format or content."""


@dataclass(frozen=True)
class ParsedTable:
    """Per-column numeric values extracted from a raw table."""

    data_rows: int
    values: dict[str, list[float]] = field(default_factory=dict)
    numeric_columns: list[str] = field(default_factory=list)


def decode_payload(payload: bytes) -> str:
    """Decode uploaded bytes as UTF-8, tolerating a byte-order mark."""
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise InvalidDatasetFormatError("Dataset is not valid UTF-8.") from exc


def _non_blank_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line.strip()]


def _clean_cell(cell: str) -> str:
    return cell.replace('"', "").strip()


def _to_float(value: Any) -> float | None:
    """Convert numeric-like values to float, or None when not numeric.

    Strings contribute their leading number, so ``"12%"`` reads as 12.
    Non-finite results are treated as non-numeric.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = LEADING_NUMBER.match(_clean_cell(value))
        if match is None:
            return None
        number = float(match.group())
    else:
        return None
    return number if math.isfinite(number) else None


def _csv_cells(text: str) -> list[list[Any]]:
    data_lines = _non_blank_lines(text)[1:]
    return [line.split(",") for line in data_lines]


def _json_cells(text: str, columns: list[str]) -> list[list[Any]]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidDatasetFormatError("Invalid JSON format.") from exc

    if not isinstance(payload, list):
        return []
    rows: list[list[Any]] = []
    for item in payload:
        if isinstance(item, dict):
            rows.append([item.get(column) for column in columns])
        else:
            rows.append([])
    return rows


def parse_table(
    raw_content: str,
    columns: list[str],
    content_type: str = CSV_CONTENT_TYPE,
) -> ParsedTable:
    """Collect parseable numbers per declared column and classify columns.

    Cells that do not parse are skipped silently. A column is numeric only
    when more than half of the data rows produced a number for it.
    """
    if content_type == JSON_CONTENT_TYPE:
        rows = _json_cells(raw_content, columns)
    else:
        rows = _csv_cells(raw_content)

    values: dict[str, list[float]] = {}
    numeric_columns: list[str] = []
    for index, column in enumerate(columns):
        parsed: list[float] = []
        for cells in rows:
            if index >= len(cells):
                continue
            number = _to_float(cells[index])
            if number is not None:
                parsed.append(number)
        if len(parsed) > len(rows) * NUMERIC_COVERAGE_THRESHOLD:
            values[column] = parsed
            numeric_columns.append(column)

    return ParsedTable(data_rows=len(rows), values=values, numeric_columns=numeric_columns)


def extract_metadata(content_type: str, text: str) -> tuple[int, list[str]]:
    """Return the data row count and header columns of an uploaded file."""
    if content_type == JSON_CONTENT_TYPE:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidDatasetFormatError("Invalid JSON format.") from exc
        if not isinstance(payload, list):
            return 0, []
        first = payload[0] if payload else None
        columns = [str(key) for key in first] if isinstance(first, dict) else []
        return len(payload), columns

    lines = _non_blank_lines(text)
    if not lines:
        return 0, []
    columns = [_clean_cell(cell) for cell in lines[0].split(",")]
    return len(lines) - 1, columns
