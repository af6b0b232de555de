"""Protocol for backing-store diagnostics observability."""

from __future__ import annotations

from typing import Protocol

import structlog


class SyncHealthProbe(Protocol):
    """Domain probe for backing-store diagnostics."""

    def health_checked(self, healthy: bool, issue_count: int) -> None:
        """Record the outcome of a diagnostics run."""
        ...


class DefaultSyncHealthProbe:
    """Default implementation of SyncHealthProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def health_checked(self, healthy: bool, issue_count: int) -> None:
        if healthy:
            self._logger.info("sync_health_checked", healthy=True, issue_count=0)
        else:
            self._logger.warning(
                "sync_health_checked", healthy=False, issue_count=issue_count
            )
