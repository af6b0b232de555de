"""HTTP routes for the sync bridge.

Every failure is answered with a structured JSON body carrying a stable
``errorType``; nothing escapes the route uncaught.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from infrastructure.settings import Settings
from shared_kernel.auth import ShopSession
from sync.application.services import (
    StatusReporter,
    SyncActionService,
    SyncHealthService,
)
from sync.dependencies import (
    get_app_settings,
    get_shop_session,
    get_status_reporter,
    get_sync_action_service,
    get_sync_health_service,
)
from sync.domain.exceptions import InvalidShapeError, SyncError
from sync.presentation.errors import sync_error_response, unexpected_error_response
from sync.presentation.models import ConnectionStatusResponse, SyncHealthResponse

router = APIRouter(
    prefix="/api/sync",
    tags=["sync"],
)


@router.get("")
async def get_sync_status(
    session: Annotated[ShopSession, Depends(get_shop_session)],
    reporter: Annotated[StatusReporter, Depends(get_status_reporter)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> JSONResponse:
    """Report the shop's connection to the platform.

    Returns:
        200 with ``connected: true`` (tenant and settings), 200 with
        ``connected: false`` and a reason when not linked, or the resolver
        error's status hint with ``error``, ``errorType`` and troubleshooting
    """
    try:
        connection_status = await reporter.report(session.shop)
    except Exception as e:
        return unexpected_error_response(e, settings.is_production)

    response = ConnectionStatusResponse.from_domain(
        connection_status, include_details=not settings.is_production
    )
    return JSONResponse(
        content=response.to_json(),
        status_code=connection_status.status_code,
    )


@router.post("")
async def perform_sync_action(
    request: Request,
    session: Annotated[ShopSession, Depends(get_shop_session)],
    service: Annotated[SyncActionService, Depends(get_sync_action_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> JSONResponse:
    """Perform a sync intent for the shop.

    Body: ``{"intent": "pull" | "push_changed" | "push_all" | "toggle_auto",
    "enabled"?: bool, "intervalMinutes"?: int}``

    Returns:
        The job function's status and body relayed verbatim (pull/push),
        ``{ok, autoSyncEnabled, autoSyncIntervalMinutes}`` (toggle_auto),
        or ``{ok: false, error, errorType}`` on failure
    """
    try:
        body = await request.json()
    except ValueError:
        return sync_error_response(
            InvalidShapeError("Invalid JSON in request body"),
            settings.is_production,
        )

    try:
        result = await service.perform(session.shop, body)
    except SyncError as e:
        return sync_error_response(e, settings.is_production)
    except Exception as e:
        return unexpected_error_response(e, settings.is_production)

    return JSONResponse(content=result.body, status_code=result.status_code)


@router.get("/health")
async def get_sync_health(
    service: Annotated[SyncHealthService, Depends(get_sync_health_service)],
) -> JSONResponse:
    """Diagnose backing-store access (unauthenticated).

    Returns:
        200 when the schema and binding table are reachable, 503 otherwise
    """
    report = await service.check()
    response = SyncHealthResponse.from_report(report)
    return JSONResponse(
        content=response.to_json(),
        status_code=(
            status.HTTP_200_OK
            if report.healthy
            else status.HTTP_503_SERVICE_UNAVAILABLE
        ),
    )
