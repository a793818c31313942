"""FastAPI glue shared by the routers: error mapping and the audit schema.

Caller mistakes (missing fields, rule violations, unknown methods/channels,
malformed bodies) become 400s; simulated processing failures and anything
unexpected become 500s.
"""

from decimal import Decimal

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from dispatch.exceptions import (
    MissingFieldError,
    ProcessingError,
    UnsupportedDiscriminantError,
    ValidationError,
)
from dispatch.port import ExecutionStatus

logger = structlog.get_logger(__name__)

FAILED = ExecutionStatus.FAILED.value


class AuditSummaryResponse(BaseModel):
    total: int
    completed: int
    failed: int
    by_discriminant: dict[str, int]
    total_fees: Decimal
    gross_volume: Decimal


def _bad_request(errors: list[str]) -> JSONResponse:
    return JSONResponse(status_code=400, content={"status": FAILED, "errors": errors})


def _server_error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"status": FAILED, "error": message})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(f"{location}: {error.get('msg')}")
    return _bad_request(errors)


async def missing_field_error_handler(request: Request, exc: MissingFieldError) -> JSONResponse:
    return _bad_request([str(exc)])


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _bad_request(list(exc.errors))


async def unsupported_discriminant_error_handler(
    request: Request, exc: UnsupportedDiscriminantError
) -> JSONResponse:
    return _bad_request([str(exc)])


async def processing_error_handler(request: Request, exc: ProcessingError) -> JSONResponse:
    return _server_error(f"Processing failed: {exc}")


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return _server_error(f"An unexpected error occurred: {exc}")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the dispatch error mapping to ``app``."""
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(MissingFieldError, missing_field_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(UnsupportedDiscriminantError, unsupported_discriminant_error_handler)
    app.add_exception_handler(ProcessingError, processing_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
