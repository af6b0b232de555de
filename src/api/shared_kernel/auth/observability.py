"""Domain probe for shop session authentication.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to session token validation.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import Protocol

import structlog


class ShopSessionProbe(Protocol):
    """Domain probe for session token validation."""

    def session_token_validated(self, shop: str) -> None:
        """Record that a session token was successfully validated."""
        ...

    def session_token_rejected(self, reason: str) -> None:
        """Record that session token validation failed."""
        ...


class DefaultShopSessionProbe:
    """Default implementation of ShopSessionProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def session_token_validated(self, shop: str) -> None:
        """Record that a session token was successfully validated."""
        self._logger.debug("session_token_validated", shop=shop)

    def session_token_rejected(self, reason: str) -> None:
        """Record that session token validation failed."""
        self._logger.warning("session_token_rejected", reason=reason)
