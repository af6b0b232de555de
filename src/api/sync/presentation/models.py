"""Pydantic models for sync API responses.

Field names are snake_case in Python and camelCase on the wire.
Responses are serialized with ``exclude_unset=True`` so each outcome
carries only the keys that belong to its shape.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sync.application.services import SyncHealthReport
from sync.domain.value_objects import ConnectionStatus, SyncErrorType, SyncSettings

GENERIC_ERROR_MESSAGE = (
    "An error occurred processing your request. Please try again later."
)


def public_error_message(
    message: str, error_type: SyncErrorType | None, include_details: bool
) -> str:
    """Hide the text of unclassified failures when details are not shown."""
    if not include_details and error_type is SyncErrorType.UNKNOWN:
        return GENERIC_ERROR_MESSAGE
    return message


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        """Dump the fields that were set, with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class SyncSettingsResponse(CamelModel):
    """Response model for a tenant's sync settings."""

    auto_sync_enabled: bool
    auto_sync_interval_minutes: int
    last_pull_at: datetime | None = None
    last_push_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, settings: SyncSettings) -> SyncSettingsResponse:
        """Convert domain SyncSettings to API response."""
        return cls(
            auto_sync_enabled=settings.auto_sync_enabled,
            auto_sync_interval_minutes=settings.auto_sync_interval_minutes,
            last_pull_at=settings.last_pull_at,
            last_push_at=settings.last_push_at,
            created_at=settings.created_at,
            updated_at=settings.updated_at,
        )


class ConnectionStatusResponse(CamelModel):
    """Response model for ``GET /api/sync``."""

    connected: bool
    shop_identity: str
    tenant_id: str | None = None
    settings: SyncSettingsResponse | None = None
    reason: str | None = None
    error: str | None = None
    error_type: str | None = None
    error_details: str | None = None
    troubleshooting: dict[str, str] | None = None

    @classmethod
    def from_domain(
        cls, status: ConnectionStatus, include_details: bool = True
    ) -> ConnectionStatusResponse:
        """Convert a ConnectionStatus to the shape of its outcome.

        Args:
            status: Snapshot from the status reporter
            include_details: Whether low-level error details may be shown

        Returns:
            ConnectionStatusResponse with only the outcome's fields set
        """
        fields: dict[str, Any] = {
            "connected": status.connected,
            "shop_identity": status.shop_identity,
        }
        if status.connected:
            fields["tenant_id"] = status.tenant_id
            fields["settings"] = (
                SyncSettingsResponse.from_domain(status.settings)
                if status.settings is not None
                else None
            )
            if status.error is not None:
                fields["error"] = public_error_message(
                    status.error, status.error_type, include_details
                )
        elif status.error_type is not None:
            fields["error"] = public_error_message(
                status.error or "", status.error_type, include_details
            )
            fields["error_type"] = status.error_type.value
            if include_details and status.error_details is not None:
                fields["error_details"] = status.error_details
            fields["troubleshooting"] = status.troubleshooting
        else:
            fields["reason"] = status.reason
        return cls(**fields)


class ErrorResponse(CamelModel):
    """Error envelope for the action path."""

    ok: bool = False
    error: str
    error_type: str | None = None
    error_details: str | None = None


class BackingStoreHealth(CamelModel):
    configured: bool
    connection: str
    error: str | None = None


class SchemaHealth(CamelModel):
    name: str
    accessible: bool
    error: str | None = None


class TableHealth(CamelModel):
    name: str
    exists: bool
    accessible: bool
    error: str | None = None
    row_count: int | None = None


class EnvironmentInfo(CamelModel):
    name: str


class RecommendationResponse(CamelModel):
    issue: str
    fix: str


class SyncHealthResponse(CamelModel):
    """Response model for ``GET /api/sync/health``."""

    healthy: bool
    timestamp: datetime
    backing_store: BackingStoreHealth
    schema_check: SchemaHealth = Field(alias="schema")
    table: TableHealth
    environment: EnvironmentInfo
    recommendations: list[RecommendationResponse] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: SyncHealthReport) -> SyncHealthResponse:
        """Convert a diagnostics report to API response."""

        def present(**values: Any) -> dict[str, Any]:
            return {key: value for key, value in values.items() if value is not None}

        return cls(
            healthy=report.healthy,
            timestamp=report.timestamp,
            backing_store=BackingStoreHealth(
                **present(
                    configured=report.backing_store.configured,
                    connection=report.backing_store.connection,
                    error=report.backing_store.error,
                )
            ),
            schema_check=SchemaHealth(
                **present(
                    name=report.schema.name,
                    accessible=report.schema.accessible,
                    error=report.schema.error,
                )
            ),
            table=TableHealth(
                **present(
                    name=report.table.name,
                    exists=report.table.exists,
                    accessible=report.table.accessible,
                    error=report.table.error,
                    row_count=report.table.row_count,
                )
            ),
            environment=EnvironmentInfo(name=report.environment),
            recommendations=[
                RecommendationResponse(issue=item.issue, fix=item.fix)
                for item in report.recommendations
            ],
        )
