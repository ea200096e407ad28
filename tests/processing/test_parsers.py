import pytest

from cortexcloud.processing.parsers import (
    InvalidDatasetFormatError,
    decode_payload,
    extract_metadata,
    parse_table,
)


def test_parse_table_csv_splits_numeric_and_categorical() -> None:
    table = parse_table("a,b\n1,x\n2,y\n3,z\n4,w\n", ["a", "b"])

    assert table.data_rows == 4
    assert table.numeric_columns == ["a"]
    assert table.values == {"a": [1.0, 2.0, 3.0, 4.0]}


def test_parse_table_half_coverage_is_not_numeric() -> None:
    table = parse_table("a\n1\nx\n2\ny\n", ["a"])

    assert table.data_rows == 4
    assert table.numeric_columns == []
    assert table.values == {}


def test_parse_table_above_half_coverage_is_numeric() -> None:
    table = parse_table("a\n1\nx\n2\n3\n", ["a"])

    assert table.numeric_columns == ["a"]
    assert table.values["a"] == [1.0, 2.0, 3.0]


def test_parse_table_skips_blank_lines_and_strips_quotes() -> None:
    table = parse_table('"a"\n" 1 "\n\n   \n"2.5"\r\n', ["a"])

    assert table.data_rows == 2
    assert table.values["a"] == [1.0, 2.5]


def test_parse_table_short_rows_and_nan_cells_are_skipped() -> None:
    table = parse_table("a,b\n1,2\n3\nnan,5\n", ["a", "b"])

    assert table.data_rows == 3
    assert table.values == {"a": [1.0, 3.0], "b": [2.0, 5.0]}
    assert table.numeric_columns == ["a", "b"]


def test_parse_table_header_only_has_no_numeric_columns() -> None:
    table = parse_table("a,b\n", ["a", "b"])

    assert table.data_rows == 0
    assert table.numeric_columns == []


def test_parse_table_json_records() -> None:
    payload = '[{"id": 1, "value": 10}, {"id": 2, "value": "20"}, {"id": 3, "value": "n/a"}]'

    table = parse_table(payload, ["id", "value"], "application/json")

    assert table.data_rows == 3
    assert table.numeric_columns == ["id", "value"]
    assert table.values["value"] == [10.0, 20.0]


def test_parse_table_json_booleans_are_not_numeric() -> None:
    payload = '[{"flag": true}, {"flag": false}, {"flag": 1}]'

    table = parse_table(payload, ["flag"], "application/json")

    assert table.numeric_columns == []


def test_parse_table_json_object_payload_has_no_rows() -> None:
    table = parse_table('{"a": 1}', ["a"], "application/json")

    assert table.data_rows == 0


def test_parse_table_invalid_json_raises() -> None:
    with pytest.raises(InvalidDatasetFormatError, match="Invalid JSON format"):
        parse_table("not-json", ["a"], "application/json")


def test_extract_metadata_csv() -> None:
    row_count, columns = extract_metadata("text/csv", '"id", "value"\n1,10\n\n2,20\n')

    assert row_count == 2
    assert columns == ["id", "value"]


def test_extract_metadata_empty_csv() -> None:
    assert extract_metadata("text/csv", "\n\n") == (0, [])


def test_extract_metadata_json() -> None:
    row_count, columns = extract_metadata("application/json", '[{"id": 1, "value": 10}, {}]')

    assert row_count == 2
    assert columns == ["id", "value"]


def test_extract_metadata_json_not_list() -> None:
    assert extract_metadata("application/json", '{"id": 1}') == (0, [])


def test_extract_metadata_invalid_json_raises() -> None:
    with pytest.raises(InvalidDatasetFormatError, match="Invalid JSON format"):
        extract_metadata("application/json", "[1,")


def test_decode_payload_strips_bom() -> None:
    assert decode_payload("\ufeffa,b\n".encode()) == "a,b\n"


def test_decode_payload_invalid_utf8_raises() -> None:
    with pytest.raises(InvalidDatasetFormatError, match="valid UTF-8"):
        decode_payload(b"\x80\x81\x82")


@pytest.mark.parametrize(
    ("cell", "expected"),
    [
        ("12%", 12.0),
        ("3.5kg", 3.5),
        ("100 USD", 100.0),
        ("1_000", 1.0),
        (".5", 0.5),
        ("-2e3x", -2000.0),
    ],
)
def test_parse_table_reads_leading_number(cell: str, expected: float) -> None:
    table = parse_table(f"a\n{cell}\n", ["a"])

    assert table.values["a"] == [expected]


def test_parse_table_percent_column_is_numeric() -> None:
    table = parse_table("rate\n12%\n15%\n20%\n", ["rate"])

    assert table.numeric_columns == ["rate"]
    assert table.values["rate"] == [12.0, 15.0, 20.0]


@pytest.mark.parametrize("cell", ["inf", "-Infinity", "1e400", "abc", "-", "."])
def test_parse_table_skips_non_finite_and_text_cells(cell: str) -> None:
    table = parse_table(f"a\n1\n{cell}\n2\n", ["a"])

    assert table.values["a"] == [1.0, 2.0]


def test_parse_table_json_skips_non_finite_numbers() -> None:
    payload = '[{"v": 1}, {"v": 1e400}, {"v": "Infinity"}, {"v": 2}, {"v": 3}]'

    table = parse_table(payload, ["v"], "application/json")

    assert table.values["v"] == [1.0, 2.0, 3.0]
