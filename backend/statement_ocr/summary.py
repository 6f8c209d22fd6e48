"""Statement totals and receipt-to-ledger mapping."""

from __future__ import annotations

from typing import Sequence

from .models import PaymentRecord, Summary, TransactionRecord
from .utils import records_to_frame


def summarize_transactions(records: Sequence[TransactionRecord]) -> Summary:
    """Reduce ledger records to totals.

    Opening/closing balance are the smallest/largest non-zero balance seen.
    Records are not guaranteed to be chronological, so this only brackets the
    statement period.
    """
    df = records_to_frame(records)
    if df.empty:
        return Summary()
    balances = df.loc[df["balance"] > 0, "balance"]
    return Summary(
        total_transactions=int(len(df)),
        total_deposits=round(float(df["deposit"].sum()), 2),
        total_withdrawals=round(float(df["withdrawal"].sum()), 2),
        opening_balance=float(balances.min()) if not balances.empty else 0.0,
        closing_balance=float(balances.max()) if not balances.empty else 0.0,
    )


def payment_to_transaction(payment: PaymentRecord) -> TransactionRecord:
    """Project a receipt onto the ledger row shape so both feed one table."""
    return TransactionRecord(
        txn_date=payment.date,
        value_date=payment.date,
        txn_type=payment.service,
        transaction_ref=payment.transaction_id,
        deposit=payment.amount or payment.total_amount,
        remitter_bank=payment.service,
        source_account=payment.from_account,
        destination_account=payment.to_account,
    )


__all__ = ["payment_to_transaction", "summarize_transactions"]
