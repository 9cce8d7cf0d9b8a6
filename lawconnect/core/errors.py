"""
Error taxonomy shared by every handler and its conversion to JSON responses.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class LawConnectError(Exception):
    """Base class for failures reported to the caller as a JSON error body."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(LawConnectError):
    """Malformed or missing caller input."""

    status_code = HTTPStatus.BAD_REQUEST


class AuthenticationError(LawConnectError):
    """Missing or invalid bearer credential."""

    status_code = HTTPStatus.UNAUTHORIZED


class NotFoundError(LawConnectError):
    """Referenced entity is absent or not owned by the caller."""

    status_code = HTTPStatus.NOT_FOUND


class PreconditionError(LawConnectError):
    """A required integration has not been set up."""

    status_code = HTTPStatus.BAD_REQUEST


class ProviderExchangeError(LawConnectError):
    """The identity provider rejected a token operation."""

    status_code = HTTPStatus.BAD_REQUEST


class DeliveryError(LawConnectError):
    """The mail API rejected a send."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR


class PersistenceError(LawConnectError):
    """A store read or write failed."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR


INTERNAL_ERROR_MESSAGE = "Error interno del servidor"

# Pydantic error types that mean "the caller left this field out".
_MISSING_ERROR_TYPES = {"missing", "string_too_short"}


def _describe_request_errors(exc: RequestValidationError) -> ValidationError:
    missing: list[str] = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        if error.get("type") in _MISSING_ERROR_TYPES and location:
            missing.append(location[-1])
    if missing:
        return ValidationError(
            f"Missing required parameters: {', '.join(missing)}"
        )
    reasons = [error.get("msg", "invalid value") for error in exc.errors()]
    return ValidationError("Invalid request body", details=reasons)


async def _handle_lawconnect_error(request: Request, exc: LawConnectError) -> JSONResponse:
    return JSONResponse(status_code=int(exc.status_code), content=exc.to_payload())


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=int(HTTPStatus.INTERNAL_SERVER_ERROR),
        content={"error": INTERNAL_ERROR_MESSAGE},
    )


async def _handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = _describe_request_errors(exc)
    logger.info("Rejected request to %s: %s", request.url.path, error.message)
    return JSONResponse(status_code=int(error.status_code), content=error.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    """Convert every domain failure into a JSON body with its HTTP status."""
    app.add_exception_handler(LawConnectError, _handle_lawconnect_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected_error)


__all__ = [
    "AuthenticationError",
    "DeliveryError",
    "INTERNAL_ERROR_MESSAGE",
    "LawConnectError",
    "NotFoundError",
    "PersistenceError",
    "PreconditionError",
    "ProviderExchangeError",
    "ValidationError",
    "register_exception_handlers",
]
