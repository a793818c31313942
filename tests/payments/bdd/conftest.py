"""Shared BDD fixtures and step definitions for the Payments domain."""

import pytest
from dispatch.config import DispatchSettings
from dispatch.random_source import ScriptedRandomSource
from payments.methods import build_payment_service
from payments.payment import PaymentMethod
from pytest_bdd import given, parsers
from support.payments import valid_details


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the captured dispatch error."""
    return {"exc": None}


@pytest.fixture()
def draft():
    """Mutable payment fields, turned into a PaymentRequest when processed."""
    return {"method": None, "amount": None, "details": {}}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a payment service that never declines", target_fixture="service")
def service_that_never_declines():
    return build_payment_service(DispatchSettings(_env_file=None), ScriptedRandomSource([0.99]))


@given("a payment service that always declines", target_fixture="service")
def service_that_always_declines():
    return build_payment_service(DispatchSettings(_env_file=None), ScriptedRandomSource([0.0]))


@given(parsers.cfparse('a valid "{method}" payment of "{amount}"'))
def valid_payment(draft, method, amount):
    draft["method"] = PaymentMethod.parse(method)
    draft["amount"] = amount
    draft["details"] = valid_details(draft["method"])


@given(parsers.cfparse('the "{name}" detail is "{value}"'))
def detail_is(draft, name, value):
    draft["details"][name] = value


@given(parsers.cfparse('the "{name}" detail is missing'))
def detail_is_missing(draft, name):
    draft["details"].pop(name, None)
