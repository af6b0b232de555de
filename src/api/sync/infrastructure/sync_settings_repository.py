"""PostgreSQL implementation of ISyncSettingsRepository.

The auto-sync toggle is written with a single ``INSERT ... ON CONFLICT
(admin_id) DO UPDATE`` statement. There is no read-then-write, so
concurrent toggles for one tenant converge to the last write and never
produce a second row.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.models import utc_now
from sync.domain.exceptions import BackingStoreError
from sync.domain.value_objects import SyncSettings, TenantId
from sync.infrastructure.error_classification import (
    classify_backing_store_error,
    extract_sqlstate,
)
from sync.infrastructure.models import ShopifySettingsModel
from sync.infrastructure.observability import (
    DefaultSyncSettingsRepositoryProbe,
    SyncSettingsRepositoryProbe,
)
from sync.ports.repositories import ISyncSettingsRepository

_BACKING_STORE_FAILURES = (SQLAlchemyError, OSError, TimeoutError)
_SETTINGS_SCHEMA = "public"


class SyncSettingsRepository(ISyncSettingsRepository):
    """Repository for per-tenant sync settings in PostgreSQL."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        probe: SyncSettingsRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            session_factory: Factory for async sessions bound to the engine
            probe: Optional domain probe for observability
        """
        self._session_factory = session_factory
        self._probe = probe or DefaultSyncSettingsRepositoryProbe()

    async def get(self, tenant_id: TenantId) -> SyncSettings | None:
        stmt = select(ShopifySettingsModel).where(
            ShopifySettingsModel.admin_id == tenant_id.value
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
        except _BACKING_STORE_FAILURES as e:
            raise self._translate("get", e) from e

        self._probe.settings_loaded(tenant_id.value, found=model is not None)
        if model is None:
            return None
        return self._to_domain(model)

    async def upsert_auto_sync(
        self,
        tenant_id: TenantId,
        enabled: bool,
        interval_minutes: int,
    ) -> None:
        stmt = insert(ShopifySettingsModel).values(
            admin_id=tenant_id.value,
            auto_sync_enabled=enabled,
            auto_sync_interval_minutes=interval_minutes,
            updated_at=utc_now(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ShopifySettingsModel.admin_id],
            set_={
                "auto_sync_enabled": stmt.excluded.auto_sync_enabled,
                "auto_sync_interval_minutes": stmt.excluded.auto_sync_interval_minutes,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(stmt)
        except _BACKING_STORE_FAILURES as e:
            raise self._translate("upsert_auto_sync", e) from e

        self._probe.settings_upserted(
            tenant_id.value,
            auto_sync_enabled=enabled,
            interval_minutes=interval_minutes,
        )

    @staticmethod
    def _to_domain(model: ShopifySettingsModel) -> SyncSettings:
        return SyncSettings(
            tenant_id=model.admin_id,
            auto_sync_enabled=model.auto_sync_enabled,
            auto_sync_interval_minutes=model.auto_sync_interval_minutes,
            last_pull_at=model.last_pull_at,
            last_push_at=model.last_push_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _translate(self, operation: str, error: BaseException) -> BackingStoreError:
        self._probe.query_failed(
            operation=operation,
            sqlstate=extract_sqlstate(error),
            error=str(error),
        )
        return classify_backing_store_error(
            error,
            schema=_SETTINGS_SCHEMA,
            table=ShopifySettingsModel.__tablename__,
        )
