"""Protocol for action request observability.

Covers the request-level events around dispatch: rejected input, missing
bindings and failures that escape the taxonomy.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class SyncActionProbe(Protocol):
    """Domain probe for action requests."""

    def action_rejected(self, shop_identity: str, error_type: str, reason: str) -> None:
        """Record that an action was refused before dispatch."""
        ...

    def action_failed(self, shop_identity: str, operation: str, error: Exception) -> None:
        """Record that an action failed with an unexpected exception."""
        ...


class DefaultSyncActionProbe:
    """Default implementation of SyncActionProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def action_rejected(self, shop_identity: str, error_type: str, reason: str) -> None:
        self._logger.warning(
            "sync_action_rejected",
            shop_identity=shop_identity,
            error_type=error_type,
            reason=reason,
        )

    def action_failed(self, shop_identity: str, operation: str, error: Exception) -> None:
        self._logger.error(
            "sync_action_failed",
            shop_identity=shop_identity,
            operation=operation,
            error=str(error),
            error_class=type(error).__name__,
            exc_info=error,
        )
