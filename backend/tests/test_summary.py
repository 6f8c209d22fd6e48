import pytest

from statement_ocr.models import PaymentRecord, TransactionRecord
from statement_ocr.summary import payment_to_transaction, summarize_transactions


def test_summary_totals():
    records = [
        TransactionRecord(deposit=1500.0, balance=1_200_000.0),
        TransactionRecord(deposit=2500.25, withdrawal=100.0, balance=0.0),
        TransactionRecord(deposit=10_000.0, balance=1_050_000.0),
    ]
    s = summarize_transactions(records)
    assert s.total_transactions == 3
    assert s.total_deposits == pytest.approx(14000.25)
    assert s.total_withdrawals == 100.0
    assert s.opening_balance == 1_050_000.0
    assert s.closing_balance == 1_200_000.0


def test_summary_without_balances():
    s = summarize_transactions([TransactionRecord(deposit=1500.0)])
    assert s.opening_balance == s.closing_balance == 0.0


def test_summary_empty():
    assert summarize_transactions([]).total_transactions == 0


def test_payment_to_transaction():
    payment = PaymentRecord(
        transaction_id="530026036841",
        date="30-Sep-2025",
        amount=1500.0,
        total_amount=1510.0,
        service="JazzCash",
        from_account="**********6197",
        to_account="*******2344",
    )
    rec = payment_to_transaction(payment)
    assert rec.txn_date == rec.value_date == "30-Sep-2025"
    assert rec.transaction_ref == "530026036841"
    assert rec.deposit == 1500.0
    assert rec.remitter_bank == "JazzCash"
    assert rec.source_account == "**********6197"
    assert rec.destination_account == "*******2344"


def test_payment_without_amount_uses_total():
    rec = payment_to_transaction(PaymentRecord(total_amount=75.0))
    assert rec.deposit == 75.0
