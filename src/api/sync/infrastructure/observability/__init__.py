"""Domain-Oriented Observability for sync infrastructure.

Probes for repository, job client and credential operations following
Domain-Oriented Observability patterns.
"""

from sync.infrastructure.observability.credential_minter_probe import (
    CredentialMinterProbe,
    DefaultCredentialMinterProbe,
)
from sync.infrastructure.observability.job_client_probe import (
    DefaultJobClientProbe,
    JobClientProbe,
)
from sync.infrastructure.observability.repository_probe import (
    DefaultSyncSettingsRepositoryProbe,
    DefaultTenantBindingRepositoryProbe,
    SyncSettingsRepositoryProbe,
    TenantBindingRepositoryProbe,
)

__all__ = [
    "CredentialMinterProbe",
    "DefaultCredentialMinterProbe",
    "JobClientProbe",
    "DefaultJobClientProbe",
    "TenantBindingRepositoryProbe",
    "DefaultTenantBindingRepositoryProbe",
    "SyncSettingsRepositoryProbe",
    "DefaultSyncSettingsRepositoryProbe",
]
