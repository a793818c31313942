"""Payment method registry and service factory.

Provides get_payment_service() / set_payment_service() to swap the active
service:
- the default service is built from DispatchSettings with a SystemRandomSource
- tests and manual runs can install one built over a ScriptedRandomSource
"""

from dispatch.audit import AuditTrail
from dispatch.config import DispatchSettings, get_settings
from dispatch.random_source import RandomSource, SystemRandomSource
from dispatch.registry import HandlerRegistry
from dispatch.service import DispatchService
from payments.methods.bank_transfer import BankTransferHandler
from payments.methods.credit_card import CreditCardHandler
from payments.methods.crypto import CryptoHandler
from payments.methods.paypal import PayPalHandler
from payments.payment import PaymentMethod

_current_service: DispatchService | None = None


def build_payment_registry(
    settings: DispatchSettings | None = None,
    random_source: RandomSource | None = None,
) -> HandlerRegistry:
    """Build the registry with one handler per PaymentMethod."""
    settings = settings or get_settings()
    random_source = random_source or SystemRandomSource()

    return HandlerRegistry(
        PaymentMethod,
        [
            (
                PaymentMethod.CREDIT_CARD,
                CreditCardHandler(random_source, failure_rate=settings.card_failure_rate),
            ),
            (
                PaymentMethod.PAYPAL,
                PayPalHandler(random_source, failure_rate=settings.paypal_failure_rate),
            ),
            (
                PaymentMethod.CRYPTO,
                CryptoHandler(
                    random_source,
                    congestion_probability=settings.crypto_congestion_probability,
                    congestion_failure_rate=settings.crypto_congestion_failure_rate,
                ),
            ),
            (
                PaymentMethod.BANK_TRANSFER,
                BankTransferHandler(random_source, failure_rate=settings.bank_transfer_failure_rate),
            ),
        ],
        label="Payment method",
    )


def build_payment_service(
    settings: DispatchSettings | None = None,
    random_source: RandomSource | None = None,
    audit: AuditTrail | None = None,
) -> DispatchService:
    settings = settings or get_settings()
    audit = audit if audit is not None else AuditTrail(settings.audit_max_results)
    return DispatchService(build_payment_registry(settings, random_source), audit=audit)


def get_payment_service() -> DispatchService:
    """Return the current payment service, building the default on first use."""
    global _current_service
    if _current_service is None:
        _current_service = build_payment_service()
    return _current_service


def set_payment_service(service: DispatchService) -> None:
    """Override the active payment service (useful for tests)."""
    global _current_service
    _current_service = service


def reset_payment_service() -> None:
    """Reset to the default service."""
    global _current_service
    _current_service = None
