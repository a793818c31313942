"""Dispatching service: resolve, validate, execute.

Thin orchestrator over a HandlerRegistry. Errors raised by the registry or
the handler are propagated unmodified; the service only reports outcomes to
the audit trail on the way through.
"""

from decimal import Decimal

import structlog

from dispatch.audit import AuditTrail
from dispatch.exceptions import ProcessingError, ValidationError
from dispatch.port import ExecutionResult
from dispatch.registry import HandlerRegistry

logger = structlog.get_logger(__name__)


class DispatchService:
    def __init__(self, registry: HandlerRegistry, audit: AuditTrail | None = None) -> None:
        self.registry = registry
        self.audit = audit

    def dispatch(self, request) -> ExecutionResult:
        """Run ``request`` through its handler.

        Raises:
            UnsupportedDiscriminantError: no handler for the request's discriminant.
            MissingFieldError: a required parameter is absent or blank.
            ValidationError: business rules rejected the request; nothing was executed.
            ProcessingError: the simulated downstream call failed.
        """
        handler = self.registry.resolve(request.discriminant)
        logger.debug("Handler selected", discriminant=request.discriminant.name, handler=type(handler).__name__)

        validation = handler.validate(request)
        if not validation.valid:
            logger.warning(
                "Request rejected by validation",
                discriminant=request.discriminant.name,
                errors=list(validation.errors),
            )
            raise ValidationError(validation.errors)

        try:
            result = handler.execute(request)
        except ProcessingError as exc:
            logger.error("Request processing failed", discriminant=request.discriminant.name, error=str(exc))
            if self.audit is not None:
                self.audit.record(
                    ExecutionResult.failed(
                        discriminant=request.discriminant.name,
                        error_message=str(exc),
                        amount=getattr(request, "amount", None),
                        currency=_currency_code(request),
                    )
                )
            raise

        logger.info(
            "Request completed",
            discriminant=request.discriminant.name,
            identifier=result.identifier,
            fee=str(result.fee),
        )
        if self.audit is not None:
            self.audit.record(result)
        return result

    def estimate_cost(self, request) -> Decimal:
        """Return the fee for ``request`` without validating or executing it."""
        handler = self.registry.resolve(request.discriminant)
        return handler.estimate_cost(request)


def _currency_code(request) -> str | None:
    currency = getattr(request, "currency", None)
    return getattr(currency, "name", None)
