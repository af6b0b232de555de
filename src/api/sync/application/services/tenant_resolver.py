"""Tenant resolution for the sync bridge.

Maps a shop identity to the platform tenant bound to it. Operational
failures are classified and returned, never raised, so callers can tell
"the lookup broke" apart from "the shop is not linked yet".
"""

from __future__ import annotations

from typing import Any

from sync.application.observability import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)
from sync.domain.exceptions import BackingStoreError, InvalidShapeError
from sync.domain.validation import validate_shop_identity, validate_tenant_id
from sync.domain.value_objects import (
    ConnectionFailure,
    SyncErrorType,
    TenantResolution,
)
from sync.ports.repositories import ITenantBindingRepository


class TenantResolver:
    """Resolves shop identities to tenant ids through the binding table."""

    def __init__(
        self,
        binding_repository: ITenantBindingRepository,
        probe: TenantResolverProbe | None = None,
    ):
        self._binding_repository = binding_repository
        self._probe = probe or DefaultTenantResolverProbe()

    async def resolve(self, shop_identity: Any) -> TenantResolution:
        """Resolve the tenant bound to a shop.

        Args:
            shop_identity: Shop domain as supplied by the authentication layer

        Returns:
            TenantResolution with the tenant id, with neither field set when
            the shop is not linked, or with a classified error
        """
        try:
            shop = validate_shop_identity(shop_identity)
        except InvalidShapeError as e:
            return self._failed(
                str(shop_identity),
                ConnectionFailure(
                    error_type=SyncErrorType.INVALID_SHAPE,
                    message=e.message,
                    status_code=400,
                ),
            )

        try:
            raw_tenant_id = await self._binding_repository.find_tenant_id(shop)
        except BackingStoreError as e:
            return self._failed(shop.value, e.to_failure())

        if raw_tenant_id is None:
            self._probe.tenant_not_linked(shop.value)
            return TenantResolution()

        # Stored data is not trusted into the credential layer unchecked
        try:
            tenant_id = validate_tenant_id(raw_tenant_id)
        except InvalidShapeError as e:
            return self._failed(
                shop.value,
                ConnectionFailure(
                    error_type=SyncErrorType.UNKNOWN,
                    message="Invalid tenant ID format returned from backing store",
                    details=e.message,
                ),
            )

        self._probe.tenant_resolved(shop.value, tenant_id.value)
        return TenantResolution(tenant_id=tenant_id)

    def _failed(self, shop_identity: str, failure: ConnectionFailure) -> TenantResolution:
        self._probe.tenant_lookup_failed(
            shop_identity=shop_identity,
            error_type=failure.error_type.value,
            message=failure.message,
        )
        return TenantResolution(error=failure)
