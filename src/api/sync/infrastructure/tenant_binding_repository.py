"""PostgreSQL implementation of ITenantBindingRepository.

The binding table is read-only from the bridge's point of view. Every
failure is translated into a classified ``BackingStoreError`` here, at
the adapter boundary, so the application layer never sees driver errors.
"""

from __future__ import annotations

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sync.domain.exceptions import BackingStoreError
from sync.domain.value_objects import ShopIdentity, SyncErrorType
from sync.infrastructure.error_classification import (
    classify_backing_store_error,
    extract_sqlstate,
)
from sync.infrastructure.models import PRIVATE_SCHEMA, ShopifyShopModel
from sync.infrastructure.observability import (
    DefaultTenantBindingRepositoryProbe,
    TenantBindingRepositoryProbe,
)
from sync.ports.repositories import ITenantBindingRepository

_BACKING_STORE_FAILURES = (SQLAlchemyError, OSError, TimeoutError)


class TenantBindingRepository(ITenantBindingRepository):
    """Repository reading shop-to-tenant bindings from PostgreSQL.

    Opens one short-lived session per lookup; lookups are plain point reads
    and need no explicit transaction.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        schema: str = PRIVATE_SCHEMA,
        probe: TenantBindingRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            session_factory: Factory for async sessions bound to the engine
            schema: Effective name of the private schema (for messages and
                the schema check; queries go through the engine's
                schema translation)
            probe: Optional domain probe for observability
        """
        self._session_factory = session_factory
        self._schema = schema
        self._probe = probe or DefaultTenantBindingRepositoryProbe()

    @property
    def table_name(self) -> str:
        """Qualified name of the binding table."""
        return f"{self._schema}.{ShopifyShopModel.__tablename__}"

    async def find_tenant_id(self, shop_identity: ShopIdentity) -> str | None:
        stmt = select(ShopifyShopModel.admin_id).where(
            ShopifyShopModel.shop_domain == shop_identity.value
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                tenant_id = result.scalar_one_or_none()
        except _BACKING_STORE_FAILURES as e:
            raise self._translate("find_tenant_id", e) from e

        if tenant_id is None:
            self._probe.binding_not_found(shop_identity.value)
        else:
            self._probe.binding_found(shop_identity.value)
        return tenant_id

    async def count_bindings(self) -> int:
        stmt = select(func.count()).select_from(ShopifyShopModel)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return int(result.scalar_one())
        except _BACKING_STORE_FAILURES as e:
            raise self._translate("count_bindings", e) from e

    async def check_schema(self) -> None:
        # has_schema_privilege raises 3F000 when the schema does not exist
        stmt = text("SELECT has_schema_privilege(:schema, 'USAGE')")
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt, {"schema": self._schema})
                has_usage = bool(result.scalar_one())
        except _BACKING_STORE_FAILURES as e:
            raise self._translate("check_schema", e) from e

        if not has_usage:
            self._probe.query_failed(
                operation="check_schema", sqlstate=None, error="missing USAGE"
            )
            raise BackingStoreError(
                f"Permission denied accessing schema '{self._schema}'. "
                "Grant the service role USAGE on it.",
                error_type=SyncErrorType.PERMISSION_DENIED,
                status_code=403,
            )

    def _translate(self, operation: str, error: BaseException) -> BackingStoreError:
        self._probe.query_failed(
            operation=operation,
            sqlstate=extract_sqlstate(error),
            error=str(error),
        )
        return classify_backing_store_error(
            error,
            schema=self._schema,
            table=ShopifyShopModel.__tablename__,
        )
