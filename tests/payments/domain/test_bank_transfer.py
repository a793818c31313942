"""Tests for the bank transfer handler."""

from decimal import Decimal

import pytest
from support.payments import make_payment
from support.text import arabic_indic
from dispatch.exceptions import MissingFieldError
from payments.methods.bank_transfer import BIC_CODE_ERROR_MSG, IBAN_ERROR_MSG, BankTransferHandler
from payments.payment import PaymentMethod, PaymentProcessingError


def _transfer(**overrides):
    return make_payment(PaymentMethod.BANK_TRANSFER, **overrides)


@pytest.fixture()
def handler(succeeding_source):
    return BankTransferHandler(succeeding_source)


class TestValidation:
    def test_valid_transfer(self, handler):
        assert handler.validate(_transfer()).valid

    @pytest.mark.parametrize("iban", ["DE89370400440532013000", "GR", "gr1601101250000000012300695"])
    def test_non_greek_iban(self, handler, iban):
        assert handler.validate(_transfer(iban=iban)).errors == (IBAN_ERROR_MSG,)

    @pytest.mark.parametrize("bic", ["1234", "123456", "ETHNGRAA"])
    def test_unsupported_bic(self, handler, bic):
        assert handler.validate(_transfer(bic_code=bic)).errors == (BIC_CODE_ERROR_MSG,)

    def test_account_holder_required(self, handler):
        with pytest.raises(MissingFieldError, match="account_holder_name is required"):
            handler.validate(_transfer(account_holder_name=""))

    def test_non_ascii_bic(self, handler):
        assert handler.validate(_transfer(bic_code=arabic_indic("12345"))).errors == (BIC_CODE_ERROR_MSG,)

    def test_non_ascii_iban(self, handler):
        result = handler.validate(_transfer(iban="GR" + arabic_indic("1601101250000000012300695")))
        assert result.errors == (IBAN_ERROR_MSG,)


class TestExecute:
    def test_no_fee(self, handler):
        result = handler.execute(_transfer(amount="5000.00"))
        assert result.fee == Decimal("0.00")
        assert result.gross_amount == Decimal("5000.00")

    def test_simulated_decline(self, failing_source):
        with pytest.raises(PaymentProcessingError, match="Insufficient funds"):
            BankTransferHandler(failing_source).execute(_transfer())
