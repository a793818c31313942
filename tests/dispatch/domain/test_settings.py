"""Tests for DispatchSettings."""

import pytest
from dispatch.config import DispatchSettings
from pydantic import ValidationError


def test_defaults(monkeypatch):
    for name in ("DISPATCH_CARD_FAILURE_RATE", "DISPATCH_NOTIFICATION_FAILURE_RATE"):
        monkeypatch.delenv(name, raising=False)
    settings = DispatchSettings(_env_file=None)
    assert settings.card_failure_rate == 0.1
    assert settings.paypal_failure_rate == 0.1
    assert settings.bank_transfer_failure_rate == 0.1
    assert settings.crypto_congestion_probability == 0.15
    assert settings.crypto_congestion_failure_rate == 0.3
    assert settings.notification_failure_rate == 0.05


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("DISPATCH_CARD_FAILURE_RATE", "0")
    assert DispatchSettings(_env_file=None).card_failure_rate == 0.0


def test_rates_must_be_probabilities():
    with pytest.raises(ValidationError):
        DispatchSettings(_env_file=None, card_failure_rate=1.5)


def test_audit_retention_must_be_positive():
    assert DispatchSettings(_env_file=None).audit_max_results == 1000
    with pytest.raises(ValidationError):
        DispatchSettings(_env_file=None, audit_max_results=0)
