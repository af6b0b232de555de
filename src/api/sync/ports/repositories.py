"""Repository protocols (ports) for the sync bounded context.

Both tables are owned by the backing store: the bridge only reads tenant
bindings, and reads or upserts the auto-sync fields of the settings row.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sync.domain.value_objects import ShopIdentity, SyncSettings, TenantId


@runtime_checkable
class ITenantBindingRepository(Protocol):
    """Read-only access to the shop-to-tenant binding table."""

    async def find_tenant_id(self, shop_identity: ShopIdentity) -> str | None:
        """Look up the tenant bound to a shop.

        Args:
            shop_identity: The validated shop identity

        Returns:
            The raw tenant identifier as stored, or None if the shop is not linked

        Raises:
            BackingStoreError: If the lookup fails, classified by SQLSTATE
        """
        ...

    async def count_bindings(self) -> int:
        """Count rows in the binding table (diagnostics only).

        Raises:
            BackingStoreError: If the table cannot be read
        """
        ...

    async def check_schema(self) -> None:
        """Verify the private schema is reachable (diagnostics only).

        Raises:
            BackingStoreError: If the schema cannot be reached
        """
        ...


@runtime_checkable
class ISyncSettingsRepository(Protocol):
    """Per-tenant sync settings persistence."""

    async def get(self, tenant_id: TenantId) -> SyncSettings | None:
        """Read the settings row for a tenant.

        Returns:
            The settings, or None if the tenant has no row yet

        Raises:
            BackingStoreError: If the read fails
        """
        ...

    async def upsert_auto_sync(
        self,
        tenant_id: TenantId,
        enabled: bool,
        interval_minutes: int,
    ) -> None:
        """Write the auto-sync fields in a single atomic upsert keyed on tenant.

        Concurrent calls for the same tenant converge to last-write-wins
        without producing duplicate rows.

        Raises:
            BackingStoreError: If the write fails
        """
        ...
