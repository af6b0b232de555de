"""Protocol for sync dispatch observability."""

from __future__ import annotations

from typing import Protocol

import structlog


class SyncDispatcherProbe(Protocol):
    """Domain probe for intent dispatch."""

    def job_dispatched(
        self, intent: str, tenant_id: str, function_name: str, status_code: int
    ) -> None:
        """Record that a job function was invoked and answered."""
        ...

    def job_dispatch_failed(
        self, intent: str, tenant_id: str, function_name: str, error: str
    ) -> None:
        """Record that a job function could not be reached."""
        ...

    def auto_sync_updated(
        self, tenant_id: str, enabled: bool, interval_minutes: int
    ) -> None:
        """Record that the auto-sync settings were written."""
        ...

    def unknown_intent(self, intent: str) -> None:
        """Record that an intent outside the closed set reached the dispatcher."""
        ...


class DefaultSyncDispatcherProbe:
    """Default implementation of SyncDispatcherProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def job_dispatched(
        self, intent: str, tenant_id: str, function_name: str, status_code: int
    ) -> None:
        self._logger.info(
            "job_dispatched",
            intent=intent,
            tenant_id=tenant_id,
            function_name=function_name,
            status_code=status_code,
        )

    def job_dispatch_failed(
        self, intent: str, tenant_id: str, function_name: str, error: str
    ) -> None:
        self._logger.error(
            "job_dispatch_failed",
            intent=intent,
            tenant_id=tenant_id,
            function_name=function_name,
            error=error,
        )

    def auto_sync_updated(
        self, tenant_id: str, enabled: bool, interval_minutes: int
    ) -> None:
        self._logger.info(
            "auto_sync_updated",
            tenant_id=tenant_id,
            enabled=enabled,
            interval_minutes=interval_minutes,
        )

    def unknown_intent(self, intent: str) -> None:
        self._logger.error("unknown_intent_dispatched", intent=intent)
