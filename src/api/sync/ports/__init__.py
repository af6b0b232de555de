"""Ports (interfaces) for the sync bounded context.

Ports define the contracts for the backing store and the job functions
without specifying implementation details, keeping the application
services independent of SQLAlchemy and httpx.
"""

from sync.ports.credentials import ICredentialMinter
from sync.ports.jobs import IJobClient, JobResponse
from sync.ports.repositories import ISyncSettingsRepository, ITenantBindingRepository

__all__ = [
    "ICredentialMinter",
    "IJobClient",
    "ISyncSettingsRepository",
    "ITenantBindingRepository",
    "JobResponse",
]
