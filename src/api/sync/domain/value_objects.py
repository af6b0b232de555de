"""Value objects for the sync domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for shop identities, tenant identifiers, intents and
the read-side snapshots the bridge hands back to callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class SyncIntent(StrEnum):
    """Synchronization or configuration operation a caller may request."""

    PULL = "pull"
    PUSH_CHANGED = "push_changed"
    PUSH_ALL = "push_all"
    TOGGLE_AUTO = "toggle_auto"


class SyncErrorType(StrEnum):
    """Stable discriminant for every failure the bridge reports.

    Calling UIs branch on this value instead of parsing messages.
    """

    INVALID_SHAPE = "invalid_shape"
    NOT_LINKED = "not_linked"
    SCHEMA_NOT_EXPOSED = "schema_not_exposed"
    PERMISSION_DENIED = "permission_denied"
    TABLE_NOT_FOUND = "table_not_found"
    NETWORK_ERROR = "network_error"
    CONFIGURATION_ERROR = "configuration_error"
    UNKNOWN_INTENT = "unknown_intent"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ShopIdentity:
    """Validated, lower-cased identifier of a storefront.

    Construct through ``sync.domain.validation.validate_shop_identity``.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class TenantId:
    """Identifier of a platform tenant, always sourced from a tenant binding.

    Construct through ``sync.domain.validation.validate_tenant_id``.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class ConnectionFailure:
    """Classified failure reaching or reading the backing store.

    Attributes:
        error_type: Failure category
        message: Human-actionable description
        details: Low-level detail such as the SQLSTATE (never shown in production)
        status_code: HTTP-equivalent status hint, None when unspecified
    """

    error_type: SyncErrorType
    message: str
    details: str | None = None
    status_code: int | None = None


@dataclass(frozen=True)
class TenantResolution:
    """Outcome of resolving a shop identity to a tenant.

    Exactly one of three states holds: a tenant was found, the shop is not
    linked yet (both fields None), or the lookup failed (``error`` set).
    """

    tenant_id: TenantId | None = None
    error: ConnectionFailure | None = None

    @property
    def is_linked(self) -> bool:
        """Whether a tenant binding was found."""
        return self.tenant_id is not None


@dataclass(frozen=True)
class SyncSettings:
    """Per-tenant synchronization settings as stored by the backing store."""

    tenant_id: str
    auto_sync_enabled: bool
    auto_sync_interval_minutes: int
    last_pull_at: datetime | None = None
    last_push_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ConnectionStatus:
    """Read-side snapshot of a shop's connection to the platform.

    Attributes:
        shop_identity: Shop the snapshot describes
        connected: Whether a tenant binding exists
        tenant_id: Bound tenant, when connected
        settings: Current settings row, None when absent or unreadable
        reason: Why the shop is not connected (not-linked outcome only)
        error: Failure message (resolver error or degraded settings read)
        error_type: Failure discriminant (resolver error or degraded read)
        error_details: Low-level failure detail for resolver errors
        troubleshooting: Actionable fixes keyed by error type
        status_code: HTTP status the snapshot should be served with
    """

    shop_identity: str
    connected: bool
    tenant_id: str | None = None
    settings: SyncSettings | None = None
    reason: str | None = None
    error: str | None = None
    error_type: SyncErrorType | None = None
    error_details: str | None = None
    troubleshooting: dict[str, str] = field(default_factory=dict)
    status_code: int = 200


@dataclass(frozen=True)
class DispatchResult:
    """Response relayed back to the caller of an action request.

    Attributes:
        status_code: HTTP status to answer with
        body: JSON-compatible payload (job response or settings confirmation)
    """

    status_code: int
    body: Any
