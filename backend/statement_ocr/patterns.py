"""Single-pass pattern extraction over normalized OCR lines.

Every match becomes an :class:`Occurrence` tagged with the index of the line
it came from. Nothing is dropped here: choosing between competing matches is
left to the proximity associator and the record assemblers.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, NamedTuple, Pattern, Sequence, Tuple

from .config import ExtractionSettings, resolve_settings
from .constants import (
    AMOUNT_RX,
    BANK_TOKEN_RX,
    DASH_DATE_RX,
    DIGIT_RUN_RX,
    IBAN_RX,
    INLINE_MARKER_RX,
    LONG_DATE_RX,
    MASKED_ACCOUNT_RX,
    NAME_SHAPE_RX,
    REFERENCE_RX,
    SLASH_DATE_RX,
    TIME_RX,
    TXN_TYPE_RX,
)
from .utils import normalize_number

logger = logging.getLogger(__name__)


class OccurrenceKind(str, Enum):
    AMOUNT = "amount"
    DATE = "date"
    TIME = "time"
    TXN_TYPE = "txn_type"
    BANK = "bank"
    ACCOUNT_NUMBER = "account_number"
    PHONE_NUMBER = "phone_number"
    REFERENCE = "reference"
    NAME_CANDIDATE = "name_candidate"


class Occurrence(NamedTuple):
    kind: OccurrenceKind
    value: object
    raw_text: str
    line_index: int
    subkind: str = ""


class DocumentProfile(NamedTuple):
    name: str
    date_patterns: Tuple[Pattern, ...]


LEDGER_PROFILE = DocumentProfile("ledger", (DASH_DATE_RX,))
RECEIPT_PROFILE = DocumentProfile(
    "receipt", (LONG_DATE_RX, DASH_DATE_RX, SLASH_DATE_RX)
)

# Account sub-kinds
IBAN = "iban"
MASKED = "masked"
DIGITS = "digits"


def _scan_line(
    line: str,
    index: int,
    profile: DocumentProfile,
    settings: ExtractionSettings,
) -> Iterable[Occurrence]:
    for rx in profile.date_patterns:
        for m in rx.finditer(line):
            yield Occurrence(OccurrenceKind.DATE, m.group(0), m.group(0), index)
    for m in TIME_RX.finditer(line):
        yield Occurrence(OccurrenceKind.TIME, m.group(0), m.group(0), index)
    for m in AMOUNT_RX.finditer(line):
        value = normalize_number(m.group(0), settings.max_amount)
        if value is not None:
            yield Occurrence(OccurrenceKind.AMOUNT, value, m.group(0), index)
    for m in TXN_TYPE_RX.finditer(line):
        yield Occurrence(OccurrenceKind.TXN_TYPE, m.group(1), m.group(0), index)
    for m in BANK_TOKEN_RX.finditer(line):
        yield Occurrence(OccurrenceKind.BANK, m.group(1), m.group(0), index)
    for m in IBAN_RX.finditer(line):
        yield Occurrence(
            OccurrenceKind.ACCOUNT_NUMBER, m.group(0), m.group(0), index, IBAN
        )
    for m in MASKED_ACCOUNT_RX.finditer(line):
        yield Occurrence(
            OccurrenceKind.ACCOUNT_NUMBER, m.group(0), m.group(0), index, MASKED
        )
    for m in DIGIT_RUN_RX.finditer(line):
        digits = m.group(0)
        if len(digits) == settings.phone_digits:
            yield Occurrence(OccurrenceKind.PHONE_NUMBER, digits, digits, index)
        if (
            len(digits) in settings.ledger_account_lengths
            or len(digits) >= settings.account_min_digits
        ):
            yield Occurrence(
                OccurrenceKind.ACCOUNT_NUMBER, digits, digits, index, DIGITS
            )
    for m in REFERENCE_RX.finditer(line):
        yield Occurrence(OccurrenceKind.REFERENCE, m.group(1), m.group(0), index)
    name = name_shape(line)
    if name:
        yield Occurrence(OccurrenceKind.NAME_CANDIDATE, name, line, index)


def name_shape(line: str) -> str:
    """Return the upper-case name carried by ``line`` or "".

    A name is either the whole line or the text after an inline section
    label ("From MUHAMMAD ALI").
    """
    inline = INLINE_MARKER_RX.match(line)
    text = inline.group("rest").strip() if inline else line
    if len(text) > 3 and NAME_SHAPE_RX.match(text):
        return text
    return ""


def extract_occurrences(
    lines: Sequence[str],
    profile: DocumentProfile = LEDGER_PROFILE,
    settings: ExtractionSettings | None = None,
) -> List[Occurrence]:
    """Run every pattern class over ``lines`` once, in line order."""
    settings = resolve_settings(settings)
    found: List[Occurrence] = []
    for index, line in enumerate(lines):
        found.extend(_scan_line(line, index, profile, settings))
    logger.debug(
        "%s profile: %d occurrences over %d lines", profile.name, len(found), len(lines)
    )
    return found


def of_kind(occurrences: Iterable[Occurrence], kind: OccurrenceKind) -> List[Occurrence]:
    return [o for o in occurrences if o.kind is kind]


__all__ = [
    "DIGITS",
    "IBAN",
    "LEDGER_PROFILE",
    "MASKED",
    "RECEIPT_PROFILE",
    "DocumentProfile",
    "Occurrence",
    "OccurrenceKind",
    "extract_occurrences",
    "name_shape",
    "of_kind",
]
