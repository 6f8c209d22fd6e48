import pytest

from statement_ocr.models import TransactionRecord
from statement_ocr.utils import (
    TRANSACTION_COLUMNS,
    df_to_records,
    normalize_lines,
    normalize_number,
    records_to_frame,
)


def test_normalize_lines_trims_and_drops_blanks():
    text = "  first line \r\n\n\tsecond  line\t\n   \nthird"
    assert normalize_lines(text) == ["first line", "second line", "third"]


def test_normalize_lines_empty_text():
    assert normalize_lines("") == []
    assert normalize_lines(" \n\t\n") == []


def test_normalize_lines_rejects_non_text():
    with pytest.raises(TypeError):
        normalize_lines(None)
    with pytest.raises(TypeError):
        normalize_lines(b"bytes are not text")


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1,234,567.89", 1234567.89),
        ("50,000.00", 50000.0),
        ("PKR 1", 1.0),
        ("Rs. 20", 20.0),
        ("Rs.1,500.5", 1500.5),
    ],
)
def test_normalize_number(raw, expected):
    assert normalize_number(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", [None, "", "abc", "-5.00", "1.2.3", "12a"])
def test_normalize_number_rejects(raw):
    assert normalize_number(raw) is None


def test_records_to_frame_column_order():
    df = records_to_frame([TransactionRecord(deposit=5000.0, txn_type="IBFT")])
    assert list(df.columns) == TRANSACTION_COLUMNS
    assert df.loc[0, "deposit"] == 5000.0


def test_records_to_frame_empty():
    df = records_to_frame([])
    assert df.empty
    assert list(df.columns) == TRANSACTION_COLUMNS
    assert df_to_records(df) == []


def test_df_to_records_plain_dicts():
    df = records_to_frame([TransactionRecord(deposit=1200.0, narration="Ref:1")])
    rows = df_to_records(df)
    assert rows[0]["deposit"] == 1200.0
    assert rows[0]["narration"] == "Ref:1"


def test_normalize_number_upper_bound():
    assert normalize_number("1,000,000,000.00", max_value=1_000_000_000) == 1e9
    assert normalize_number("1,000,000,000.01", max_value=1_000_000_000) is None
    assert normalize_number("9" * 400 + ".00") is None
