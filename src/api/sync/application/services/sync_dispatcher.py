"""Routing of sync intents to job functions.

Pull and push intents are relayed to job functions with the scoped
credential; the dispatcher does not reinterpret their answers. The
``toggle_auto`` intent is handled locally as an authoritative write of
the tenant's auto-sync settings.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sync.application.observability import (
    DefaultSyncDispatcherProbe,
    SyncDispatcherProbe,
)
from sync.domain.exceptions import JobDispatchError, UnknownIntentError
from sync.domain.validation import validate_interval_minutes
from sync.domain.value_objects import DispatchResult, SyncIntent, TenantId
from sync.ports.jobs import IJobClient
from sync.ports.repositories import ISyncSettingsRepository

DEFAULT_PULL_FUNCTION = "shopify-pull-products"
DEFAULT_PUSH_FUNCTION = "shopify-push-products"


@dataclass(frozen=True)
class JobRoute:
    """Job function and payload an intent is relayed to."""

    function_name: str
    payload: dict[str, Any] = field(default_factory=dict)


def build_job_routes(
    pull_function: str = DEFAULT_PULL_FUNCTION,
    push_function: str = DEFAULT_PUSH_FUNCTION,
) -> dict[SyncIntent, JobRoute]:
    """Build the intent-to-job table for the relayed intents."""
    return {
        SyncIntent.PULL: JobRoute(pull_function),
        SyncIntent.PUSH_CHANGED: JobRoute(push_function, {"mode": "changed"}),
        SyncIntent.PUSH_ALL: JobRoute(push_function, {"mode": "all", "force": True}),
    }


class SyncDispatcher:
    """Dispatches a validated intent for a resolved tenant."""

    def __init__(
        self,
        job_client: IJobClient,
        settings_repository: ISyncSettingsRepository,
        job_routes: Mapping[SyncIntent, JobRoute] | None = None,
        probe: SyncDispatcherProbe | None = None,
    ):
        self._job_client = job_client
        self._settings_repository = settings_repository
        self._job_routes = dict(job_routes or build_job_routes())
        self._probe = probe or DefaultSyncDispatcherProbe()

    async def dispatch(
        self,
        intent: SyncIntent,
        tenant_id: TenantId,
        token: str,
        body: Mapping[str, Any],
    ) -> DispatchResult:
        """Dispatch an intent.

        Args:
            intent: Intent already validated against the closed set
            tenant_id: Resolved tenant
            token: Scoped credential for the tenant
            body: The caller's request body (read by ``toggle_auto``)

        Returns:
            The relayed job answer, or the stored auto-sync settings

        Raises:
            InvalidShapeError: If ``toggle_auto`` carries an invalid interval
            JobDispatchError: If the job function cannot be reached
            BackingStoreError: If the settings upsert fails
            UnknownIntentError: If the intent is outside the closed set
        """
        match intent:
            case SyncIntent.PULL | SyncIntent.PUSH_CHANGED | SyncIntent.PUSH_ALL:
                return await self._relay(intent, tenant_id, token)
            case SyncIntent.TOGGLE_AUTO:
                return await self._toggle_auto(tenant_id, body)
            case _:
                self._probe.unknown_intent(str(intent))
                raise UnknownIntentError(f"Unknown intent: {intent}")

    async def _relay(
        self, intent: SyncIntent, tenant_id: TenantId, token: str
    ) -> DispatchResult:
        route = self._job_routes[intent]
        try:
            response = await self._job_client.invoke(
                route.function_name,
                token,
                dict(route.payload),
            )
        except JobDispatchError as e:
            self._probe.job_dispatch_failed(
                intent=intent.value,
                tenant_id=tenant_id.value,
                function_name=route.function_name,
                error=e.message,
            )
            raise

        self._probe.job_dispatched(
            intent=intent.value,
            tenant_id=tenant_id.value,
            function_name=route.function_name,
            status_code=response.status_code,
        )
        return DispatchResult(status_code=response.status_code, body=response.body)

    async def _toggle_auto(
        self, tenant_id: TenantId, body: Mapping[str, Any]
    ) -> DispatchResult:
        enabled = bool(body.get("enabled"))
        interval_minutes = validate_interval_minutes(body.get("intervalMinutes"))

        await self._settings_repository.upsert_auto_sync(
            tenant_id,
            enabled=enabled,
            interval_minutes=interval_minutes,
        )

        self._probe.auto_sync_updated(
            tenant_id=tenant_id.value,
            enabled=enabled,
            interval_minutes=interval_minutes,
        )
        return DispatchResult(
            status_code=200,
            body={
                "ok": True,
                "autoSyncEnabled": enabled,
                "autoSyncIntervalMinutes": interval_minutes,
            },
        )
