"""Domain-Oriented Observability for the sync application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from sync.application.observability.status_reporter_probe import (
    DefaultStatusReporterProbe,
    StatusReporterProbe,
)
from sync.application.observability.sync_action_probe import (
    DefaultSyncActionProbe,
    SyncActionProbe,
)
from sync.application.observability.sync_dispatcher_probe import (
    DefaultSyncDispatcherProbe,
    SyncDispatcherProbe,
)
from sync.application.observability.sync_health_probe import (
    DefaultSyncHealthProbe,
    SyncHealthProbe,
)
from sync.application.observability.tenant_resolver_probe import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)

__all__ = [
    "StatusReporterProbe",
    "DefaultStatusReporterProbe",
    "SyncActionProbe",
    "DefaultSyncActionProbe",
    "SyncDispatcherProbe",
    "DefaultSyncDispatcherProbe",
    "SyncHealthProbe",
    "DefaultSyncHealthProbe",
    "TenantResolverProbe",
    "DefaultTenantResolverProbe",
]
