"""Protocol for connection status observability."""

from __future__ import annotations

from typing import Protocol

import structlog


class StatusReporterProbe(Protocol):
    """Domain probe for connection status reads."""

    def status_reported(self, shop_identity: str, connected: bool) -> None:
        """Record that a status snapshot was assembled."""
        ...

    def settings_read_failed(self, tenant_id: str, error_type: str, error: str) -> None:
        """Record that settings could not be read for a linked tenant."""
        ...

    def report_failed(self, shop_identity: str, error: Exception) -> None:
        """Record that a status read failed with an unexpected exception."""
        ...


class DefaultStatusReporterProbe:
    """Default implementation of StatusReporterProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def status_reported(self, shop_identity: str, connected: bool) -> None:
        self._logger.debug(
            "status_reported",
            shop_identity=shop_identity,
            connected=connected,
        )

    def settings_read_failed(self, tenant_id: str, error_type: str, error: str) -> None:
        self._logger.warning(
            "settings_read_failed",
            tenant_id=tenant_id,
            error_type=error_type,
            error=error,
        )

    def report_failed(self, shop_identity: str, error: Exception) -> None:
        self._logger.error(
            "status_report_failed",
            shop_identity=shop_identity,
            error=str(error),
            error_class=type(error).__name__,
            exc_info=error,
        )
