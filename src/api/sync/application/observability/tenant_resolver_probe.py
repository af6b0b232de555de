"""Protocol for tenant resolution observability.

Defines the interface for domain probes that capture how shop identities
are resolved to platform tenants.
"""

from __future__ import annotations

from typing import Protocol

import structlog


class TenantResolverProbe(Protocol):
    """Domain probe for tenant resolution."""

    def tenant_resolved(self, shop_identity: str, tenant_id: str) -> None:
        """Record that a shop resolved to a tenant."""
        ...

    def tenant_not_linked(self, shop_identity: str) -> None:
        """Record that a shop has no tenant binding yet."""
        ...

    def tenant_lookup_failed(
        self, shop_identity: str, error_type: str, message: str
    ) -> None:
        """Record that resolution failed with a classified error."""
        ...


class DefaultTenantResolverProbe:
    """Default implementation of TenantResolverProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def tenant_resolved(self, shop_identity: str, tenant_id: str) -> None:
        """Record that a shop resolved to a tenant."""
        self._logger.info(
            "tenant_resolved",
            shop_identity=shop_identity,
            tenant_id=tenant_id,
        )

    def tenant_not_linked(self, shop_identity: str) -> None:
        """Record that a shop has no tenant binding yet."""
        self._logger.info("tenant_not_linked", shop_identity=shop_identity)

    def tenant_lookup_failed(
        self, shop_identity: str, error_type: str, message: str
    ) -> None:
        """Record that resolution failed with a classified error."""
        self._logger.error(
            "tenant_lookup_failed",
            shop_identity=shop_identity,
            error_type=error_type,
            message=message,
        )
