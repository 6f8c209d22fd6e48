import pytest
from pydantic import ValidationError

from statement_ocr.config import (
    ExtractionSettings,
    load_settings,
    reload_settings,
    resolve_settings,
)
from statement_ocr.statement_parser import parse_bank_statement


def test_defaults():
    s = load_settings()
    assert s.window_radius == 15
    assert s.min_transaction_amount == 1000.0
    assert s.balance_threshold == 1_000_000.0
    assert s.phone_digits == 11
    assert s.account_min_digits == 15
    assert s.home_currency == "PKR"
    assert s.max_amount == 1_000_000_000.0


def test_band_checks():
    s = ExtractionSettings()
    assert s.is_transaction_amount(1000.0)
    assert not s.is_transaction_amount(999.99)
    assert not s.is_transaction_amount(1_000_000.0)
    assert s.is_balance_amount(1_000_000.0)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("OCR_WINDOW_RADIUS", "4")
    monkeypatch.setenv("OCR_HOME_CURRENCY", "USD")
    s = reload_settings()
    assert s.window_radius == 4
    assert s.home_currency == "USD"
    assert parse_bank_statement("Currency missing").account_info.currency == "USD"


def test_invalid_band_rejected():
    with pytest.raises(ValidationError):
        ExtractionSettings(min_transaction_amount=5_000_000)
    with pytest.raises(ValidationError):
        ExtractionSettings(max_amount=500_000)


def test_invalid_env_value(monkeypatch):
    monkeypatch.setenv("OCR_WINDOW_RADIUS", "-1")
    with pytest.raises(ValidationError):
        reload_settings()


def test_settings_are_frozen():
    with pytest.raises(ValidationError):
        ExtractionSettings().window_radius = 3


def test_resolve_prefers_explicit():
    explicit = ExtractionSettings(window_radius=2)
    assert resolve_settings(explicit) is explicit
    assert resolve_settings(None) == load_settings()
