"""Integration tests for the Payments API endpoints."""

from decimal import Decimal

import pytest
from dispatch.config import DispatchSettings
from dispatch.random_source import ScriptedRandomSource
from fastapi.testclient import TestClient
from payments.methods import build_payment_service, set_payment_service
from payments.payment import PaymentMethod
from support.payments import valid_details


def _get_test_client():
    """Build a minimal FastAPI test client with payments routes and error mapping."""
    from dispatch.api import register_exception_handlers
    from fastapi import FastAPI
    from payments.api import payment_router

    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(payment_router)
    return TestClient(app, raise_server_exceptions=False)


def _install_service(*draws):
    service = build_payment_service(DispatchSettings(_env_file=None), ScriptedRandomSource(draws))
    set_payment_service(service)
    return service


def _body(method="CREDIT_CARD", amount="100.00", **overrides):
    details = valid_details(PaymentMethod.parse(method))
    details.update(overrides)
    return {"amount": amount, "currency": "EUR", "method": method, "payment_details": details}


@pytest.fixture()
def client():
    _install_service(0.99)
    return _get_test_client()


class TestProcessPayment:
    def test_credit_card(self, client):
        resp = client.post("/payments/process", json=_body())
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "COMPLETED"
        assert data["transaction_id"].startswith("TXN-")
        assert data["method"] == "CREDIT_CARD"
        assert Decimal(data["fee"]) == Decimal("3.20")
        assert Decimal(data["gross_amount"]) == Decimal("103.20")
        assert data["currency"] == "EUR"

    def test_method_by_display_name(self, client):
        resp = client.post("/payments/process", json=_body(method="PayPal"))
        assert resp.status_code == 200
        assert resp.json()["method"] == "PAYPAL"

    def test_validation_errors(self, client):
        resp = client.post("/payments/process", json=_body(cvv="1"))
        assert resp.status_code == 400
        assert resp.json() == {"status": "FAILED", "errors": ["CVV must be 3-4 digits"]}

    def test_missing_detail(self, client):
        resp = client.post("/payments/process", json=_body(cvv=None))
        assert resp.status_code == 400
        assert resp.json()["errors"] == ["cvv is required"]

    def test_numeric_details_are_read_as_text(self, client):
        resp = client.post("/payments/process", json=_body(cvv=123, card_number=4532015112830366))
        assert resp.status_code == 200
        assert resp.json()["status"] == "COMPLETED"

    def test_unknown_method(self, client):
        body = _body()
        body["method"] = "CHEQUE"
        resp = client.post("/payments/process", json=body)
        assert resp.status_code == 400
        assert "not currently supported" in resp.json()["errors"][0]

    def test_unknown_currency(self, client):
        body = _body()
        body["currency"] = "JPY"
        resp = client.post("/payments/process", json=body)
        assert resp.status_code == 400
        assert resp.json()["errors"] == ["Currency 'JPY' is not currently supported"]

    def test_non_positive_amount(self, client):
        resp = client.post("/payments/process", json=_body(amount="0"))
        assert resp.status_code == 400
        assert resp.json()["errors"][0].startswith("amount:")

    def test_simulated_decline(self):
        _install_service(0.0)
        resp = _get_test_client().post("/payments/process", json=_body())
        assert resp.status_code == 500
        assert resp.json() == {"status": "FAILED", "error": "Processing failed: Insufficient funds"}


class TestFeeEstimate:
    def test_card_fee(self, client):
        resp = client.post("/payments/fee-estimate", json={"amount": "1000.00", "method": "CREDIT_CARD"})
        assert resp.status_code == 200
        assert Decimal(resp.json()["fee"]) == Decimal("29.30")

    def test_estimate_skips_validation(self, client):
        # crypto minimum does not apply to estimates
        resp = client.post("/payments/fee-estimate", json={"amount": "5.00", "method": "CRYPTO"})
        assert resp.status_code == 200
        assert Decimal(resp.json()["fee"]) == Decimal("5.05")


class TestAudit:
    def test_audit_summary(self, client):
        client.post("/payments/process", json=_body())
        client.post("/payments/process", json=_body(method="BANK_TRANSFER"))

        data = client.get("/payments/audit").json()
        assert data["total"] == 2
        assert data["completed"] == 2
        assert data["by_discriminant"] == {"CREDIT_CARD": 1, "BANK_TRANSFER": 1}
        assert Decimal(data["total_fees"]) == Decimal("3.20")
