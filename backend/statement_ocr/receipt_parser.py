"""Mobile-payment / transfer receipt parsing.

A receipt describes exactly one payment, so there is no anchoring: each field
is read from the whole document through an ordered chain of
``PatternRule(name, pattern, extract)`` alternatives. The first rule whose
extractor returns a value wins; later rules are only fallbacks.

Dates and times use the *last* match of the winning rule, because several
wallets repeat the timestamp in a footer that is more reliable than the
header copy. All other fields use the first match.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, NamedTuple, Optional, Pattern, Sequence, Tuple

from .classify import classify_document, detect_service, detect_status
from .config import ExtractionSettings, resolve_settings
from .constants import (
    AMOUNT_LABEL_RX,
    BARE_NUMBER_RX,
    CHARGE_LINE_RX,
    DASH_DATE_RX,
    DATE_TIME_RX,
    DIGIT_RUN_RX,
    FEE_INLINE_RX,
    FEE_LABEL_RX,
    ID_HASH_RX,
    INLINE_AMOUNT_RX,
    LONG_DATE_RX,
    MERIDIEM_TIME_RX,
    ON_DATE_RX,
    PKR_AMOUNT_RX,
    PLAIN_TIME_RX,
    REF_HASH_RX,
    RS_AMOUNT_RX,
    SLASH_DATE_RX,
    TID_RX,
    TOTAL_INLINE_RX,
    TOTAL_LABEL_RX,
)
from .models import PaymentRecord
from .names import NameLexicon, resolve_names
from .patterns import RECEIPT_PROFILE, extract_occurrences
from .utils import normalize_lines, normalize_number

logger = logging.getLogger(__name__)

Extractor = Callable[[Pattern, Sequence[str]], Optional[str]]


class PatternRule(NamedTuple):
    name: str
    pattern: Pattern
    extract: Extractor


def _value(m) -> str:
    return m.group(1) if m.re.groups else m.group(0)


def first_group(pattern: Pattern, lines: Sequence[str]) -> Optional[str]:
    for line in lines:
        m = pattern.search(line)
        if m:
            return _value(m)
    return None


def last_group(pattern: Pattern, lines: Sequence[str]) -> Optional[str]:
    found = None
    for line in lines:
        for m in pattern.finditer(line):
            found = _value(m)
    return found


def first_payment_amount(pattern: Pattern, lines: Sequence[str]) -> Optional[str]:
    """Like :func:`first_group` but ignores fee / total lines."""
    return first_group(pattern, [ln for ln in lines if not CHARGE_LINE_RX.search(ln)])


def label_then_next(pattern: Pattern, lines: Sequence[str]) -> Optional[str]:
    """A line that is only the label, followed by a line that is only a number."""
    for i, line in enumerate(lines[:-1]):
        if pattern.match(line):
            m = BARE_NUMBER_RX.match(lines[i + 1])
            if m:
                return m.group("num")
    return None


def long_number(min_digits: int = 10) -> Extractor:
    def extract(pattern: Pattern, lines: Sequence[str]) -> Optional[str]:
        for line in lines:
            for m in pattern.finditer(line):
                if len(m.group(0)) >= min_digits:
                    return m.group(0)
        return None

    return extract


def labeled_amount(label: Pattern, inline: Pattern) -> Extractor:
    """Amount printed after ``label`` on the same line or alone on the next one."""

    def extract(_pattern: Pattern, lines: Sequence[str]) -> Optional[str]:
        for i, line in enumerate(lines):
            if not label.search(line):
                continue
            m = inline.search(line)
            if m:
                return m.group(1)
            if i + 1 < len(lines):
                nxt = BARE_NUMBER_RX.match(lines[i + 1])
                if nxt:
                    return nxt.group("num")
        return None

    return extract


TRANSACTION_ID_CHAIN: Tuple[PatternRule, ...] = (
    PatternRule("tid", TID_RX, first_group),
    PatternRule("id_hash", ID_HASH_RX, first_group),
    PatternRule("ref_hash", REF_HASH_RX, first_group),
    PatternRule("long_number", DIGIT_RUN_RX, long_number(10)),
)
AMOUNT_CHAIN: Tuple[PatternRule, ...] = (
    PatternRule("pkr", PKR_AMOUNT_RX, first_payment_amount),
    PatternRule("rs", RS_AMOUNT_RX, first_payment_amount),
    PatternRule("amount_label", AMOUNT_LABEL_RX, label_then_next),
    PatternRule("amount_inline", INLINE_AMOUNT_RX, first_payment_amount),
)
FEE_CHAIN: Tuple[PatternRule, ...] = (
    PatternRule("fee", FEE_LABEL_RX, labeled_amount(FEE_LABEL_RX, FEE_INLINE_RX)),
)
TOTAL_CHAIN: Tuple[PatternRule, ...] = (
    PatternRule("total", TOTAL_LABEL_RX, labeled_amount(TOTAL_LABEL_RX, TOTAL_INLINE_RX)),
)
DATE_CHAIN: Tuple[PatternRule, ...] = (
    PatternRule("long_date", LONG_DATE_RX, last_group),
    PatternRule("dash_date", DASH_DATE_RX, last_group),
    PatternRule("slash_date", SLASH_DATE_RX, last_group),
    PatternRule("on_date", ON_DATE_RX, last_group),
)
TIME_CHAIN: Tuple[PatternRule, ...] = (
    PatternRule("meridiem", MERIDIEM_TIME_RX, last_group),
    PatternRule("plain", PLAIN_TIME_RX, last_group),
    PatternRule("date_time", DATE_TIME_RX, last_group),
)


def first_match(
    chain: Sequence[PatternRule], lines: Sequence[str]
) -> Tuple[str, Optional[str]]:
    """Evaluate ``chain`` in order; return ``(rule name, value)`` of the winner."""
    for rule in chain:
        value = rule.extract(rule.pattern, lines)
        if value is not None:
            return rule.name, value
    return "", None


def _text_field(chain: Sequence[PatternRule], lines: Sequence[str]) -> str:
    name, value = first_match(chain, lines)
    if value is None:
        return ""
    logger.debug("%s matched %r", name, value)
    return " ".join(value.split())


def _amount_field(
    chain: Sequence[PatternRule], lines: Sequence[str], settings: ExtractionSettings
) -> Tuple[float, bool]:
    name, value = first_match(chain, lines)
    amount = normalize_number(value, settings.max_amount)
    if amount is None:
        return 0.0, False
    logger.debug("%s matched %r", name, value)
    return amount, True


def parse_payment_receipt(
    raw_text: str,
    settings: ExtractionSettings | None = None,
    lexicon: NameLexicon | None = None,
) -> PaymentRecord:
    """Parse OCR text of a single payment receipt."""
    settings = resolve_settings(settings)
    lines = normalize_lines(raw_text)
    text = " ".join(lines)

    amount, _ = _amount_field(AMOUNT_CHAIN, lines, settings)
    fee, _ = _amount_field(FEE_CHAIN, lines, settings)
    total, has_total = _amount_field(TOTAL_CHAIN, lines, settings)
    if not has_total:
        total = amount + fee
    if not math.isfinite(total):
        total = 0.0

    occurrences = extract_occurrences(lines, RECEIPT_PROFILE, settings)
    names = resolve_names(lines, occurrences, lexicon=lexicon, settings=settings)

    return PaymentRecord(
        transaction_id=_text_field(TRANSACTION_ID_CHAIN, lines),
        date=_text_field(DATE_CHAIN, lines),
        time=_text_field(TIME_CHAIN, lines),
        amount=amount,
        fee=fee,
        total_amount=total,
        service=detect_service(text),
        status=detect_status(text),
        currency=settings.home_currency,
        **names.model_dump(),
    )


def to_structured(payment: PaymentRecord, raw_text: str = "") -> Dict[str, Any]:
    """Nested review view of a receipt (sender / receiver / amount / details)."""
    return {
        "transaction_type": classify_document(raw_text),
        "sender": {
            "name": payment.from_name,
            "account": payment.from_account,
            "phone": payment.from_phone,
        },
        "receiver": {
            "name": payment.to_name,
            "account": payment.to_account,
            "phone": payment.to_phone,
        },
        "amount": {"value": payment.amount, "currency": payment.currency},
        "transaction_details": {
            "date": payment.date,
            "time": payment.time,
            "transaction_id": payment.transaction_id,
            "service": payment.service,
            "status": payment.status,
        },
        "raw_text": raw_text,
    }


__all__ = [
    "AMOUNT_CHAIN",
    "DATE_CHAIN",
    "FEE_CHAIN",
    "TIME_CHAIN",
    "TOTAL_CHAIN",
    "TRANSACTION_ID_CHAIN",
    "PatternRule",
    "first_match",
    "parse_payment_receipt",
    "to_structured",
]
