"""Validation for untrusted input reaching the sync bridge.

All validators are pure functions over arbitrary values: they never trust
the caller-asserted type and raise ``InvalidShapeError`` with a message
that is safe to show to the caller.
"""

from __future__ import annotations

import re
from typing import Any

from sync.domain.exceptions import InvalidShapeError
from sync.domain.value_objects import ShopIdentity, SyncIntent, TenantId

MAX_IDENTIFIER_LENGTH = 255
MIN_INTERVAL_MINUTES = 1
MAX_INTERVAL_MINUTES = 1440
DEFAULT_INTERVAL_MINUTES = 15

SHOP_IDENTITY_PATTERN = re.compile(
    r"^[a-z0-9][a-z0-9\-]*[a-z0-9]\.myshopify\.com$"
)
TENANT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")


def validate_shop_identity(value: Any) -> ShopIdentity:
    """Validate and normalize a shop identity.

    Args:
        value: Candidate shop domain, e.g. ``"My-Store.myshopify.com "``

    Returns:
        ShopIdentity holding the trimmed, lower-cased domain

    Raises:
        InvalidShapeError: If the value is not a string on the shop domain pattern
    """
    if not isinstance(value, str):
        raise InvalidShapeError("Shop domain must be a string")

    normalized = value.strip().lower()
    if not normalized:
        raise InvalidShapeError("Shop domain cannot be empty")
    if len(normalized) > MAX_IDENTIFIER_LENGTH:
        raise InvalidShapeError("Shop domain is too long")
    if not SHOP_IDENTITY_PATTERN.match(normalized):
        raise InvalidShapeError(
            "Invalid shop domain format. Must be in format: store.myshopify.com"
        )

    return ShopIdentity(value=normalized)


def validate_intent(value: Any) -> SyncIntent:
    """Validate a sync intent against the closed set.

    Raises:
        InvalidShapeError: If the value is not one of the known intents
    """
    if not isinstance(value, str):
        raise InvalidShapeError("Intent must be a string")

    try:
        return SyncIntent(value)
    except ValueError:
        allowed = ", ".join(intent.value for intent in SyncIntent)
        raise InvalidShapeError(f"Invalid intent. Must be one of: {allowed}") from None


def validate_interval_minutes(
    value: Any, default: int = DEFAULT_INTERVAL_MINUTES
) -> int:
    """Validate the auto-sync interval.

    ``None`` yields the default. Integral floats (``30.0``) are accepted as
    their integer value; booleans are rejected even though they are ints.

    Raises:
        InvalidShapeError: If the value is not an integer in [1, 1440]
    """
    if value is None:
        return default

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidShapeError("Interval minutes must be a number")

    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidShapeError("Interval minutes must be an integer")
        value = int(value)

    if value < MIN_INTERVAL_MINUTES:
        raise InvalidShapeError("Interval minutes must be at least 1")
    if value > MAX_INTERVAL_MINUTES:
        raise InvalidShapeError("Interval minutes cannot exceed 1440 (24 hours)")

    return value


def validate_tenant_id(value: Any) -> TenantId:
    """Validate a tenant identifier.

    Raises:
        InvalidShapeError: If the value is empty, too long or has characters
            outside ``[A-Za-z0-9_-]``
    """
    if not isinstance(value, str):
        raise InvalidShapeError("Tenant ID must be a string")

    trimmed = value.strip()
    if not trimmed:
        raise InvalidShapeError("Tenant ID cannot be empty")
    if len(trimmed) > MAX_IDENTIFIER_LENGTH:
        raise InvalidShapeError("Tenant ID is too long")
    if not TENANT_ID_PATTERN.match(trimmed):
        raise InvalidShapeError("Invalid tenant ID: contains disallowed characters")

    return TenantId(value=trimmed)
