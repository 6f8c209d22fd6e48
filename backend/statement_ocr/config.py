"""Tunable extraction settings.

Defaults were chosen empirically against Pakistani bank ledgers and wallet
receipts. Every value can be overridden per call (pass ``settings=``) or per
process through environment variables:

  OCR_WINDOW_RADIUS=15               -> lines searched on each side of an anchor
  OCR_MIN_TRANSACTION_AMOUNT=1000    -> smallest amount treated as a transaction
  OCR_BALANCE_THRESHOLD=1000000      -> amounts at/above are running balances
  OCR_MAX_AMOUNT=1000000000          -> larger numbers are OCR noise, not money
  OCR_PHONE_DIGITS=11                -> length of a bare phone number
  OCR_ACCOUNT_MIN_DIGITS=15          -> shortest bare account number on receipts
  OCR_HOME_CURRENCY=PKR              -> currency reported when none is printed
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Tuple

from pydantic import BaseModel, Field, model_validator

_ENV_FIELDS = {
    "window_radius": "OCR_WINDOW_RADIUS",
    "min_transaction_amount": "OCR_MIN_TRANSACTION_AMOUNT",
    "balance_threshold": "OCR_BALANCE_THRESHOLD",
    "max_amount": "OCR_MAX_AMOUNT",
    "phone_digits": "OCR_PHONE_DIGITS",
    "account_min_digits": "OCR_ACCOUNT_MIN_DIGITS",
    "home_currency": "OCR_HOME_CURRENCY",
}


class ExtractionSettings(BaseModel):
    window_radius: int = Field(15, ge=0)
    min_transaction_amount: float = Field(1000.0, ge=0)
    balance_threshold: float = Field(1_000_000.0, gt=0)
    max_amount: float = Field(1_000_000_000.0, gt=0)
    phone_digits: int = Field(11, ge=1)
    account_min_digits: int = Field(15, ge=1)
    ledger_account_lengths: Tuple[int, ...] = (11, 15)
    home_currency: str = "PKR"
    provenance_separator: str = " | "

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_band(self) -> "ExtractionSettings":
        if self.min_transaction_amount >= self.balance_threshold:
            raise ValueError(
                "min_transaction_amount must be below balance_threshold"
            )
        if self.balance_threshold > self.max_amount:
            raise ValueError("balance_threshold must not exceed max_amount")
        return self

    def is_transaction_amount(self, value: float) -> bool:
        return self.min_transaction_amount <= value < self.balance_threshold

    def is_balance_amount(self, value: float) -> bool:
        return value >= self.balance_threshold


@lru_cache(maxsize=1)
def load_settings() -> ExtractionSettings:
    """Build settings from ``OCR_*`` environment variables (cached)."""
    overrides = {}
    for field, env_name in _ENV_FIELDS.items():
        raw = os.environ.get(env_name)
        if raw is not None and raw.strip():
            overrides[field] = raw.strip()
    return ExtractionSettings(**overrides)


def reload_settings() -> ExtractionSettings:
    load_settings.cache_clear()
    return load_settings()


def resolve_settings(settings: ExtractionSettings | None) -> ExtractionSettings:
    return settings if settings is not None else load_settings()


__all__ = [
    "ExtractionSettings",
    "load_settings",
    "reload_settings",
    "resolve_settings",
]
