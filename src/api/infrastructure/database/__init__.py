"""Database infrastructure - shared engine and ORM primitives."""

from infrastructure.database.engines import (
    build_async_url,
    create_engine,
    create_session_factory,
)
from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
    "build_async_url",
    "create_engine",
    "create_session_factory",
]
