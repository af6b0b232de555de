"""FastAPI dependencies for the sync bounded context.

Services are read from the ServiceContainer built once at start-up and
stored on ``app.state``. Tests replace these getters through
``app.dependency_overrides``.

Rejections raise ``HTTPException`` whose detail is the ``{ok, error,
errorType}`` envelope; the sync error handler returns it as the body.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from infrastructure.container import ServiceContainer
from infrastructure.settings import Settings
from shared_kernel.auth import (
    InvalidSessionTokenError,
    ShopSession,
    ShopSessionValidator,
)
from sync.application.services import (
    StatusReporter,
    SyncActionService,
    SyncHealthService,
)
from sync.domain.value_objects import SyncErrorType

bearer_scheme = HTTPBearer(auto_error=False)


def get_service_container(request: Request) -> ServiceContainer:
    """Get the service container built by the application lifespan.

    Raises:
        HTTPException 503: If the container was never configured
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "ok": False,
                "error": "Service is not configured",
                "errorType": SyncErrorType.CONFIGURATION_ERROR.value,
            },
        )
    return container


def get_app_settings(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> Settings:
    """Get the application settings the container was built with."""
    return container.settings


def get_shop_session_validator(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> ShopSessionValidator:
    """Get the shop session token validator."""
    return container.session_validator


def get_status_reporter(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> StatusReporter:
    """Get the status reporter for the read path."""
    return container.status_reporter


def get_sync_action_service(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> SyncActionService:
    """Get the action service for the write path."""
    return container.action_service


def get_sync_health_service(
    container: Annotated[ServiceContainer, Depends(get_service_container)],
) -> SyncHealthService:
    """Get the backing-store diagnostics service."""
    return container.health_service


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"ok": False, "error": message, "errorType": "unauthorized"},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_shop_session(
    validator: Annotated[ShopSessionValidator, Depends(get_shop_session_validator)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> ShopSession:
    """Authenticate the request with the embedded-app session token.

    Args:
        validator: Session token validator
        credentials: Bearer credentials from the Authorization header

    Returns:
        ShopSession naming the shop the request acts for

    Raises:
        HTTPException 401: If the token is missing or invalid
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        return validator.validate_token(credentials.credentials)
    except InvalidSessionTokenError as e:
        raise _unauthorized(str(e)) from e
