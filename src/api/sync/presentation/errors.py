"""Error envelopes and message sanitization for sync API responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sync.domain.exceptions import SyncError
from sync.domain.value_objects import SyncErrorType
from sync.presentation.models import (
    GENERIC_ERROR_MESSAGE,
    ErrorResponse,
    public_error_message,
)

# Messages containing these markers are validation messages, safe to show
SAFE_MESSAGE_MARKERS = ("must be", "cannot", "Invalid")

__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "register_error_handlers",
    "sanitize_error_message",
    "sync_error_response",
    "unexpected_error_response",
]


def sanitize_error_message(error: BaseException, is_production: bool) -> str:
    """Return a message for ``error`` that is safe to show to the caller.

    Outside production the message is returned as is. In production only
    validation-style messages pass through; everything else becomes a
    generic sentence.
    """
    message = str(error) or type(error).__name__
    if not is_production:
        return message
    if any(marker in message for marker in SAFE_MESSAGE_MARKERS):
        return message
    return GENERIC_ERROR_MESSAGE


def sync_error_response(error: SyncError, is_production: bool) -> JSONResponse:
    """Build the ``{ok: false, error, errorType}`` envelope for a SyncError.

    In production the message of an ``unknown`` failure is always replaced
    by the generic sentence, and low-level details are left out.
    """
    fields: dict[str, object] = {
        "ok": False,
        "error": public_error_message(
            error.message, error.error_type, include_details=not is_production
        ),
        "error_type": error.error_type.value,
    }
    if not is_production and error.details is not None:
        fields["error_details"] = error.details

    envelope = ErrorResponse(**fields)
    return JSONResponse(content=envelope.to_json(), status_code=error.status_code)


def unexpected_error_response(error: Exception, is_production: bool) -> JSONResponse:
    """Build the 500 envelope for an exception outside the taxonomy."""
    envelope = ErrorResponse(
        ok=False,
        error=sanitize_error_message(error, is_production),
        error_type=SyncErrorType.UNKNOWN.value,
    )
    return JSONResponse(content=envelope.to_json(), status_code=500)


async def envelope_http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Answer dependency rejections with their envelope at the top level.

    ``HTTPException`` details that are already ``{ok, error, errorType}``
    envelopes are returned as the body; other HTTP errors keep FastAPI's
    default ``{"detail": ...}`` shape.
    """
    if isinstance(exc.detail, dict) and "errorType" in exc.detail:
        return JSONResponse(
            content=exc.detail,
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )
    return await http_exception_handler(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Install the sync error handlers on an application."""
    app.add_exception_handler(StarletteHTTPException, envelope_http_exception_handler)
