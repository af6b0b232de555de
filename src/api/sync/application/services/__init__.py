"""Application services for the sync bounded context.

Application services orchestrate validation, repositories, the credential
minter and the job client to fulfill the read and write use cases.
"""

from sync.application.services.status_reporter import StatusReporter
from sync.application.services.sync_action_service import SyncActionService
from sync.application.services.sync_dispatcher import SyncDispatcher
from sync.application.services.sync_health_service import (
    SyncHealthReport,
    SyncHealthService,
)
from sync.application.services.tenant_resolver import TenantResolver

__all__ = [
    "StatusReporter",
    "SyncActionService",
    "SyncDispatcher",
    "SyncHealthReport",
    "SyncHealthService",
    "TenantResolver",
]
