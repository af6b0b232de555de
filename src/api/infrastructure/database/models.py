"""SQLAlchemy declarative base for backing-store tables.

The bridge maps tables it does not own: the metadata is never used to
create or migrate anything. Models therefore declare only the columns the
bridge reads or writes, and rely on the annotation map below for the
column types the store uses (timezone-aware timestamps, varchar(255)
identifiers).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Current time in UTC, for ``insert_default`` and explicit upsert values."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for store-owned tables."""

    type_annotation_map: dict[type, Any] = {
        datetime: DateTime(timezone=True),
        str: String(255),
    }


class TimestampMixin:
    """``created_at`` / ``updated_at`` columns maintained by the bridge.

    ``onupdate`` does not fire for ``INSERT ... ON CONFLICT DO UPDATE``, so
    upserts set ``updated_at`` themselves.
    """

    created_at: Mapped[datetime] = mapped_column(insert_default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        insert_default=utc_now, onupdate=utc_now
    )
