"""Connection status snapshots for the read path.

A status read never fails as a whole because of a settings problem:
once the tenant is resolved, an unreadable settings row degrades to
``settings=None`` plus an error message.
"""

from __future__ import annotations

from typing import Any

from sync.application.observability import (
    DefaultStatusReporterProbe,
    StatusReporterProbe,
)
from sync.application.services.tenant_resolver import TenantResolver
from sync.domain.exceptions import BackingStoreError
from sync.domain.value_objects import ConnectionStatus, SyncErrorType
from sync.ports.repositories import ISyncSettingsRepository

NOT_LINKED_REASON = (
    "This store is installed, but it is not linked to a platform tenant yet. "
    "Link it from the platform app first."
)

TROUBLESHOOTING: dict[str, str] = {
    SyncErrorType.SCHEMA_NOT_EXPOSED.value: (
        "Create the private schema or set BRIDGE_DB_PRIVATE_SCHEMA to the "
        "schema that holds shopify_shops"
    ),
    SyncErrorType.PERMISSION_DENIED.value: (
        "Grant the service role USAGE on the private schema and SELECT on "
        "shopify_shops"
    ),
    SyncErrorType.TABLE_NOT_FOUND.value: (
        "Ensure the shopify_shops table exists in the private schema"
    ),
    SyncErrorType.NETWORK_ERROR.value: (
        "Check BRIDGE_DB_HOST, BRIDGE_DB_PORT and network connectivity"
    ),
}


class StatusReporter:
    """Assembles the connection snapshot of a shop."""

    def __init__(
        self,
        resolver: TenantResolver,
        settings_repository: ISyncSettingsRepository,
        probe: StatusReporterProbe | None = None,
    ):
        self._resolver = resolver
        self._settings_repository = settings_repository
        self._probe = probe or DefaultStatusReporterProbe()

    async def report(self, shop_identity: Any) -> ConnectionStatus:
        """Report whether a shop is linked and, if so, its sync settings.

        Returns one of three shapes: a resolver error (with troubleshooting
        hints and the error's status hint), not linked (with a reason), or
        connected (with tenant id and settings, possibly None).
        """
        shop = str(shop_identity)
        try:
            status = await self._report(shop_identity, shop)
        except Exception as e:
            self._probe.report_failed(shop, error=e)
            raise

        self._probe.status_reported(shop, connected=status.connected)
        return status

    async def _report(self, shop_identity: Any, shop: str) -> ConnectionStatus:
        resolution = await self._resolver.resolve(shop_identity)

        if resolution.error is not None:
            failure = resolution.error
            return ConnectionStatus(
                shop_identity=shop,
                connected=False,
                error=failure.message,
                error_type=failure.error_type,
                error_details=failure.details,
                troubleshooting=dict(TROUBLESHOOTING),
                status_code=failure.status_code or 500,
            )

        tenant_id = resolution.tenant_id
        if tenant_id is None:
            return ConnectionStatus(
                shop_identity=shop,
                connected=False,
                reason=NOT_LINKED_REASON,
            )

        try:
            settings = await self._settings_repository.get(tenant_id)
        except BackingStoreError as e:
            # A linked tenant is still reported as connected
            self._probe.settings_read_failed(
                tenant_id=tenant_id.value,
                error_type=e.error_type.value,
                error=e.message,
            )
            return ConnectionStatus(
                shop_identity=shop,
                connected=True,
                tenant_id=tenant_id.value,
                settings=None,
                error=e.message,
                error_type=e.error_type,
            )

        return ConnectionStatus(
            shop_identity=shop,
            connected=True,
            tenant_id=tenant_id.value,
            settings=settings,
        )
