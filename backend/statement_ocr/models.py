"""Plain record types returned by the parsers.

Numeric fields default to 0 and text fields to "" so consumers never have to
handle missing values.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class TransactionRecord(BaseModel):
    txn_date: str = ""
    value_date: str = ""
    txn_type: str = ""
    transaction_ref: str = ""
    branch_name: str = ""
    narration: str = ""
    withdrawal: float = 0.0
    deposit: float = 0.0
    balance: float = 0.0
    remitter_bank: str = ""
    source_account: str = ""
    destination_account: str = ""
    raw_line: str = ""


class AccountInfo(BaseModel):
    account_number: str = ""
    account_title: str = ""
    currency: str = ""
    account_type: str = ""
    bank_name: str = ""
    branch_name: str = ""
    from_date: str = ""
    to_date: str = ""
    statement_date: str = ""


class Summary(BaseModel):
    total_transactions: int = 0
    total_deposits: float = 0.0
    total_withdrawals: float = 0.0
    opening_balance: float = 0.0
    closing_balance: float = 0.0


class StatementResult(BaseModel):
    account_info: AccountInfo = Field(default_factory=AccountInfo)
    transactions: List[TransactionRecord] = Field(default_factory=list)
    summary: Summary = Field(default_factory=Summary)
    raw_text: str = ""


class NameSections(BaseModel):
    from_name: str = ""
    to_name: str = ""
    from_phone: str = ""
    to_phone: str = ""
    from_account: str = ""
    to_account: str = ""


class PaymentRecord(BaseModel):
    transaction_id: str = ""
    date: str = ""
    time: str = ""
    amount: float = 0.0
    fee: float = 0.0
    total_amount: float = 0.0
    from_name: str = ""
    from_phone: str = ""
    to_name: str = ""
    to_phone: str = ""
    from_account: str = ""
    to_account: str = ""
    service: str = "Unknown"
    status: str = "Success"
    currency: str = "PKR"


__all__ = [
    "AccountInfo",
    "NameSections",
    "PaymentRecord",
    "StatementResult",
    "Summary",
    "TransactionRecord",
]
