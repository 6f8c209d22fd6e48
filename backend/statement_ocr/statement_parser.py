"""Ledger-page parsing: one transaction record per plausible amount.

OCR of a statement table loses the column structure, so rows are rebuilt
around anchors instead of lines. Every amount inside the transaction band
(``[min_transaction_amount, balance_threshold)``) anchors one record; the
other fields are pulled from occurrences within ``window_radius`` lines of
that anchor.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .config import ExtractionSettings, resolve_settings
from .constants import ACCOUNT_LABEL_RX, PREFERRED_BANK_RX, PREFERRED_TXN_TYPE_RX
from .models import AccountInfo, StatementResult, TransactionRecord
from .patterns import (
    DIGITS,
    LEDGER_PROFILE,
    Occurrence,
    OccurrenceKind,
    extract_occurrences,
    of_kind,
)
from .proximity import closest, closest_in_value, first, nearest, window_bounds
from .summary import summarize_transactions
from .utils import normalize_lines

logger = logging.getLogger(__name__)


def _is_preferred_txn_type(o: Occurrence) -> bool:
    return bool(PREFERRED_TXN_TYPE_RX.match(o.value))


def _is_preferred_bank(o: Occurrence) -> bool:
    return bool(PREFERRED_BANK_RX.match(o.value))


def _ledger_accounts(
    occurrences: Sequence[Occurrence], settings: ExtractionSettings
) -> List[Occurrence]:
    return [
        o
        for o in of_kind(occurrences, OccurrenceKind.ACCOUNT_NUMBER)
        if o.subkind != DIGITS or len(o.value) in settings.ledger_account_lengths
    ]


def anchor_amounts(
    occurrences: Sequence[Occurrence], settings: ExtractionSettings | None = None
) -> List[Occurrence]:
    """Amount occurrences that stand for a single transaction, in document order."""
    settings = resolve_settings(settings)
    return [
        o
        for o in of_kind(occurrences, OccurrenceKind.AMOUNT)
        if settings.is_transaction_amount(o.value)
    ]


def build_transaction(
    anchor: Occurrence,
    occurrences: Sequence[Occurrence],
    lines: Sequence[str],
    settings: ExtractionSettings | None = None,
) -> TransactionRecord:
    """Assemble the record anchored at ``anchor`` from its line window."""
    settings = resolve_settings(settings)
    radius = settings.window_radius
    rec = TransactionRecord(deposit=anchor.value)

    dates = nearest(anchor, of_kind(occurrences, OccurrenceKind.DATE), radius)
    if dates:
        rec.txn_date = dates[0].value
        rec.value_date = dates[0].value

    txn_type = closest(
        anchor,
        nearest(anchor, of_kind(occurrences, OccurrenceKind.TXN_TYPE), radius),
        preferred=_is_preferred_txn_type,
    )
    if txn_type is not None:
        rec.txn_type = txn_type.value
        rec.transaction_ref = txn_type.value

    bank = closest(
        anchor,
        nearest(anchor, of_kind(occurrences, OccurrenceKind.BANK), radius),
        preferred=_is_preferred_bank,
    )
    if bank is not None:
        rec.remitter_bank = bank.value

    accounts = nearest(anchor, _ledger_accounts(occurrences, settings), radius)
    source, destination = first(accounts), first(accounts, 1)
    if source is not None:
        rec.source_account = source.value
    if destination is not None:
        rec.destination_account = destination.value

    refs = nearest(anchor, of_kind(occurrences, OccurrenceKind.REFERENCE), radius)
    if refs:
        rec.narration = refs[0].value

    balances = [
        o
        for o in nearest(anchor, of_kind(occurrences, OccurrenceKind.AMOUNT), radius)
        if settings.is_balance_amount(o.value)
    ]
    balance = closest_in_value(anchor.value, balances)
    if balance is not None:
        rec.balance = balance.value

    start, end = window_bounds(anchor, radius, len(lines))
    rec.raw_line = settings.provenance_separator.join(lines[start : end + 1])
    return rec


def extract_account_info(
    lines: Sequence[str],
    occurrences: Sequence[Occurrence],
    settings: ExtractionSettings | None = None,
) -> AccountInfo:
    """Statement header fields: labeled values first, then whatever turned up."""
    settings = resolve_settings(settings)
    info = AccountInfo(currency=settings.home_currency)
    for field, rx in ACCOUNT_LABEL_RX.items():
        for line in lines:
            m = rx.search(line)
            if m:
                setattr(info, field, " ".join(m.group(1).split()))
                break

    if not info.account_number:
        full = [
            o
            for o in of_kind(occurrences, OccurrenceKind.ACCOUNT_NUMBER)
            if o.subkind == DIGITS and len(o.value) == settings.account_min_digits
        ]
        if full:
            info.account_number = full[0].value
    if not info.bank_name:
        banks = of_kind(occurrences, OccurrenceKind.BANK)
        if banks:
            info.bank_name = banks[0].value
    if not info.from_date and not info.to_date:
        dates = of_kind(occurrences, OccurrenceKind.DATE)
        if len(dates) >= 2:
            info.from_date = dates[0].value
            info.to_date = dates[1].value
    return info


def parse_bank_statement(
    raw_text: str, settings: ExtractionSettings | None = None
) -> StatementResult:
    """Parse OCR text of a bank-statement ledger page."""
    settings = resolve_settings(settings)
    lines = normalize_lines(raw_text)
    occurrences = extract_occurrences(lines, LEDGER_PROFILE, settings)
    anchors = anchor_amounts(occurrences, settings)
    logger.debug("ledger: %d anchors from %d lines", len(anchors), len(lines))
    transactions = [
        build_transaction(anchor, occurrences, lines, settings) for anchor in anchors
    ]
    return StatementResult(
        account_info=extract_account_info(lines, occurrences, settings),
        transactions=transactions,
        summary=summarize_transactions(transactions),
        raw_text=raw_text,
    )


__all__ = [
    "anchor_amounts",
    "build_transaction",
    "extract_account_info",
    "parse_bank_statement",
]
