"""Backing-store diagnostics for ``GET /api/sync/health``.

Probes the private schema and the binding table step by step and turns
each classified failure into an actionable recommendation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from sync.application.observability import DefaultSyncHealthProbe, SyncHealthProbe
from sync.domain.exceptions import BackingStoreError
from sync.domain.value_objects import SyncErrorType
from sync.ports.repositories import ITenantBindingRepository


@dataclass
class BackingStoreCheck:
    configured: bool
    connection: str = "not_tested"
    error: str | None = None


@dataclass
class SchemaCheck:
    name: str
    accessible: bool = False
    error: str | None = None


@dataclass
class TableCheck:
    name: str
    exists: bool = False
    accessible: bool = False
    error: str | None = None
    row_count: int | None = None


@dataclass(frozen=True)
class Recommendation:
    issue: str
    fix: str


@dataclass
class SyncHealthReport:
    """Diagnostics snapshot; healthy only when every check passed."""

    timestamp: datetime
    backing_store: BackingStoreCheck
    schema: SchemaCheck
    table: TableCheck
    environment: str
    recommendations: list[Recommendation] = field(default_factory=list)

    @property
    def healthy(self) -> bool:
        return (
            self.backing_store.connection == "ok"
            and self.schema.accessible
            and self.table.exists
            and self.table.accessible
        )


class SyncHealthService:
    """Runs the backing-store diagnostics."""

    def __init__(
        self,
        binding_repository: ITenantBindingRepository,
        schema_name: str,
        table_name: str,
        environment: str,
        configured: bool = True,
        probe: SyncHealthProbe | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._binding_repository = binding_repository
        self._schema_name = schema_name
        self._table_name = table_name
        self._environment = environment
        self._configured = configured
        self._probe = probe or DefaultSyncHealthProbe()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def check(self) -> SyncHealthReport:
        """Run all checks and collect recommendations."""
        report = SyncHealthReport(
            timestamp=self._clock(),
            backing_store=BackingStoreCheck(configured=self._configured),
            schema=SchemaCheck(name=self._schema_name),
            table=TableCheck(name=self._table_name),
            environment=self._environment,
        )

        if not self._configured:
            report.backing_store.connection = "error"
            report.backing_store.error = "Backing store connection is not configured"
            report.recommendations.append(
                Recommendation(
                    issue="Missing configuration",
                    fix="Set BRIDGE_DB_HOST, BRIDGE_DB_USERNAME and BRIDGE_DB_PASSWORD",
                )
            )
        elif await self._check_schema(report):
            await self._check_table(report)

        self._probe.health_checked(
            healthy=report.healthy, issue_count=len(report.recommendations)
        )
        return report

    async def _check_schema(self, report: SyncHealthReport) -> bool:
        try:
            await self._binding_repository.check_schema()
        except BackingStoreError as e:
            if e.error_type is SyncErrorType.NETWORK_ERROR:
                self._connection_failed(report, e)
                return False
            report.backing_store.connection = "ok"
            report.schema.error = e.message
            report.recommendations.append(
                Recommendation(
                    issue="Schema not accessible",
                    fix=(
                        f"Create schema '{self._schema_name}' and grant the "
                        "service role USAGE on it"
                    ),
                )
            )
            return False

        report.backing_store.connection = "ok"
        report.schema.accessible = True
        return True

    async def _check_table(self, report: SyncHealthReport) -> None:
        try:
            count = await self._binding_repository.count_bindings()
        except BackingStoreError as e:
            report.table.error = e.message
            match e.error_type:
                case SyncErrorType.NETWORK_ERROR:
                    self._connection_failed(report, e)
                case SyncErrorType.TABLE_NOT_FOUND:
                    report.recommendations.append(
                        Recommendation(
                            issue="Table does not exist",
                            fix=(
                                f"Create the {self._schema_name}.{self._table_name} "
                                "table in the backing store"
                            ),
                        )
                    )
                case SyncErrorType.PERMISSION_DENIED:
                    report.table.exists = True
                    report.recommendations.append(
                        Recommendation(
                            issue="Table not readable",
                            fix=(
                                "Grant the service role SELECT on "
                                f"{self._schema_name}.{self._table_name}"
                            ),
                        )
                    )
                case _:
                    report.recommendations.append(
                        Recommendation(
                            issue="Table check failed",
                            fix="Inspect the backing store logs for the reported error",
                        )
                    )
            return

        report.table.exists = True
        report.table.accessible = True
        report.table.row_count = count

    @staticmethod
    def _connection_failed(report: SyncHealthReport, error: BackingStoreError) -> None:
        report.backing_store.connection = "error"
        report.backing_store.error = error.message
        report.recommendations.append(
            Recommendation(
                issue="Connection failed",
                fix="Check BRIDGE_DB_HOST, BRIDGE_DB_PORT and the service credentials",
            )
        )
