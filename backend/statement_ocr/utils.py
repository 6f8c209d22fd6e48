"""Small shared helpers used by the extraction modules."""

from __future__ import annotations

import math
import re
from typing import Iterable, List

import pandas as pd

_SPACE_RX = re.compile(r"[ \t\u00a0]+")
_CURRENCY_PREFIX_RX = re.compile(r"^(?:PKR|Rs\.?)\s*", re.IGNORECASE)
_NUMBER_RX = re.compile(r"\d+(?:\.\d+)?")

TRANSACTION_COLUMNS = [
    "txn_date",
    "value_date",
    "txn_type",
    "transaction_ref",
    "branch_name",
    "narration",
    "withdrawal",
    "deposit",
    "balance",
    "remitter_bank",
    "source_account",
    "destination_account",
    "raw_line",
]


def normalize_lines(raw_text: str) -> List[str]:
    """Split OCR text into trimmed, non-empty lines (original order kept).

    Runs of spaces, tabs and non-breaking spaces inside a line collapse to a
    single space. Anything other than ``str`` is a caller error.
    """
    if not isinstance(raw_text, str):
        raise TypeError(
            f"OCR text must be str, not {type(raw_text).__name__}"
        )
    lines: List[str] = []
    for raw_line in raw_text.replace("\r", "\n").split("\n"):
        s = _SPACE_RX.sub(" ", raw_line).strip()
        if s:
            lines.append(s)
    return lines


def normalize_number(raw: str | None, max_value: float | None = None) -> float | None:
    """Parse a currency-like token ("1,234.50", "PKR 1", "Rs. 20") to float.

    Returns None when the token is not a plain non-negative number, or when
    it exceeds ``max_value``.
    """
    if not raw:
        return None
    token = _CURRENCY_PREFIX_RX.sub("", raw.strip())
    core = token.replace(",", "")
    if not _NUMBER_RX.fullmatch(core):
        return None
    v = float(core)
    if not math.isfinite(v):
        return None
    if max_value is not None and v > max_value:
        return None
    return v


def records_to_frame(records: Iterable) -> pd.DataFrame:
    """Tabulate TransactionRecords with a fixed column order."""
    rows = [r.model_dump() for r in records]
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)


def df_to_records(df: pd.DataFrame) -> List[dict]:
    """Convert a DataFrame to JSON-serializable records (NA -> None)."""
    if df is None or df.empty:
        return []
    out = df.to_dict(orient="records")
    for rec in out:
        for k, v in list(rec.items()):
            if pd.isna(v):
                rec[k] = None
    return out


__all__ = [
    "TRANSACTION_COLUMNS",
    "df_to_records",
    "normalize_lines",
    "normalize_number",
    "records_to_frame",
]
