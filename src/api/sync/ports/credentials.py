"""Scoped credential port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sync.domain.value_objects import TenantId


@runtime_checkable
class ICredentialMinter(Protocol):
    """Issues short-lived credentials scoped to a single tenant."""

    def mint(self, tenant_id: TenantId) -> str:
        """Sign a credential asserting the tenant with the admin role.

        The tenant id is trusted as already validated by the resolver.

        Raises:
            ConfigurationError: If no signing key is configured
        """
        ...
