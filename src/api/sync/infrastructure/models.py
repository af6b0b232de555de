"""SQLAlchemy ORM models for the sync bounded context.

Both tables are created and owned by the backing store; the models only
describe the columns the bridge reads or writes. The binding table lives
in a private schema whose name is configurable through the engine's
``schema_translate_map``.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin

PRIVATE_SCHEMA = "app_private"


class ShopifyShopModel(Base):
    """Binding of a storefront to a platform tenant.

    At most one row exists per shop domain.
    """

    __tablename__ = "shopify_shops"
    __table_args__ = {"schema": PRIVATE_SCHEMA}

    shop_domain: Mapped[str] = mapped_column(primary_key=True)
    admin_id: Mapped[str]

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<ShopifyShopModel(shop_domain={self.shop_domain}, admin_id={self.admin_id})>"


class ShopifySettingsModel(Base, TimestampMixin):
    """Per-tenant synchronization settings, keyed by the tenant id."""

    __tablename__ = "shopify_settings"

    admin_id: Mapped[str] = mapped_column(primary_key=True)
    auto_sync_enabled: Mapped[bool] = mapped_column(default=False)
    auto_sync_interval_minutes: Mapped[int] = mapped_column(default=15)
    last_pull_at: Mapped[datetime | None]
    last_push_at: Mapped[datetime | None]

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ShopifySettingsModel(admin_id={self.admin_id}, "
            f"auto_sync_enabled={self.auto_sync_enabled})>"
        )
