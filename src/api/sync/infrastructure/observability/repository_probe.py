"""Domain probes for backing-store repositories.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events of the binding and settings tables without
exposing logging details to the repositories.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import Protocol

import structlog


class TenantBindingRepositoryProbe(Protocol):
    """Domain probe for tenant binding lookups."""

    def binding_found(self, shop_identity: str) -> None:
        """Record that a binding row exists for the shop."""
        ...

    def binding_not_found(self, shop_identity: str) -> None:
        """Record that the shop has no binding row."""
        ...

    def query_failed(self, operation: str, sqlstate: str | None, error: str) -> None:
        """Record that a binding table query failed."""
        ...


class DefaultTenantBindingRepositoryProbe:
    """Default implementation of TenantBindingRepositoryProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def binding_found(self, shop_identity: str) -> None:
        self._logger.debug("tenant_binding_found", shop_identity=shop_identity)

    def binding_not_found(self, shop_identity: str) -> None:
        self._logger.debug("tenant_binding_not_found", shop_identity=shop_identity)

    def query_failed(self, operation: str, sqlstate: str | None, error: str) -> None:
        self._logger.error(
            "tenant_binding_query_failed",
            operation=operation,
            sqlstate=sqlstate,
            error=error,
        )


class SyncSettingsRepositoryProbe(Protocol):
    """Domain probe for sync settings persistence."""

    def settings_loaded(self, tenant_id: str, found: bool) -> None:
        """Record that the settings row was read."""
        ...

    def settings_upserted(
        self, tenant_id: str, auto_sync_enabled: bool, interval_minutes: int
    ) -> None:
        """Record that the auto-sync fields were written."""
        ...

    def query_failed(self, operation: str, sqlstate: str | None, error: str) -> None:
        """Record that a settings table query failed."""
        ...


class DefaultSyncSettingsRepositoryProbe:
    """Default implementation of SyncSettingsRepositoryProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def settings_loaded(self, tenant_id: str, found: bool) -> None:
        self._logger.debug("sync_settings_loaded", tenant_id=tenant_id, found=found)

    def settings_upserted(
        self, tenant_id: str, auto_sync_enabled: bool, interval_minutes: int
    ) -> None:
        self._logger.info(
            "sync_settings_upserted",
            tenant_id=tenant_id,
            auto_sync_enabled=auto_sync_enabled,
            interval_minutes=interval_minutes,
        )

    def query_failed(self, operation: str, sqlstate: str | None, error: str) -> None:
        self._logger.error(
            "sync_settings_query_failed",
            operation=operation,
            sqlstate=sqlstate,
            error=error,
        )
