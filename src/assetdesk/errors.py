"""Error taxonomy and the single boundary that renders it.

Services raise the typed errors below; the handlers registered by
setup_exception_handlers() turn them into the wire body every client sees:

    {"path": "/api/1.0/...", "timestamp": 1700000000000,
     "message": "...", "validationErrors": {"field": "message"}}

validationErrors is only present for validation failures.
"""

import time
from typing import Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

logger = structlog.get_logger()


class AppError(Exception):
    """Base class for errors that map to a non-500 response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Field-level input failures. Maps field name -> first failing message."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation Failure"

    def __init__(self, validation_errors: dict[str, str], message: Optional[str] = None):
        super().__init__(message)
        self.validation_errors = validation_errors


class AuthenticationError(AppError):
    """Login failed: unknown e-mail, wrong password or malformed input."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Incorrect credentials"


class UnauthorizedError(AppError):
    """No usable identity, or identity from another company."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "User is inactive"


NOT_ALLOWED = "You are not allowed to perform this operation"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    entity = "Resource"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or f"{self.entity} not found")


class UserNotFound(NotFoundError):
    entity = "User"


class CompanyNotFound(NotFoundError):
    entity = "Company"


class AssetNotFound(NotFoundError):
    entity = "Asset"


class AssetGroupNotFound(NotFoundError):
    entity = "Asset Group"


class VendorNotFound(NotFoundError):
    entity = "Vendor"


class StatusNotFound(NotFoundError):
    entity = "Status"


# ─── Boundary ────────────────────────────────────────────


def _request_path(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def build_error_body(
    request: Request,
    message: str,
    validation_errors: Optional[dict[str, str]] = None,
) -> dict:
    body = {
        "path": _request_path(request),
        "timestamp": int(time.time() * 1000),
        "message": message,
    }
    if validation_errors is not None:
        body["validationErrors"] = validation_errors
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.info(
        "request.rejected",
        status_code=exc.status_code,
        error=type(exc).__name__,
        message=exc.message,
    )
    validation_errors = getattr(exc, "validation_errors", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_body(request, exc.message, validation_errors),
    )


def _field_of(loc: tuple) -> str:
    """("body", "email") -> "email"; whole-body failures -> "body".

    Defaults validated for missing fields report the attribute name, so
    snake_case names are mapped back to their camelCase wire alias.
    """
    named = [part for part in loc if isinstance(part, str) and part != "body"]
    if not named:
        return "body"
    field = named[-1]
    return to_camel(field) if "_" in field else field


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render pydantic failures in the same shape as ValidationError."""
    validation_errors: dict[str, str] = {}
    for error in exc.errors():
        # First failing rule per field wins.
        validation_errors.setdefault(_field_of(tuple(error["loc"])), error["msg"])

    logger.info("request.invalid", fields=sorted(validation_errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_error_body(
            request, ValidationError.default_message, validation_errors
        ),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("request.failed", error=type(exc).__name__, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=build_error_body(request, AppError.default_message),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
