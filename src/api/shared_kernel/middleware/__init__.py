"""Shared middleware for cross-cutting concerns.

This module contains FastAPI middleware that is shared across bounded
contexts. The request context middleware binds a request id into the
structlog context of every request.
"""

from shared_kernel.middleware.request_context import (
    REQUEST_ID_HEADER,
    bind_request_context,
)

__all__ = ["REQUEST_ID_HEADER", "bind_request_context"]
