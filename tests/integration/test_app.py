"""Smoke tests for the assembled application."""

from fastapi.testclient import TestClient


def _client():
    from app import app

    return TestClient(app)


def test_health_lists_registered_discriminants():
    data = _client().get("/health").json()
    assert data["status"] == "ok"
    assert data["payment_methods"] == ["CREDIT_CARD", "PAYPAL", "CRYPTO", "BANK_TRANSFER"]
    assert data["notification_channels"] == ["EMAIL", "SMS", "PUSH", "SLACK"]


def test_both_routers_are_mounted():
    paths = {route.path for route in _client().app.routes}
    assert {"/payments/process", "/notifications/send", "/payments/audit", "/notifications/audit"} <= paths
