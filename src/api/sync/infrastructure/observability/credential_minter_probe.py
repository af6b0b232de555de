"""Domain probe for scoped credential issuance.

Tokens and the signing secret are never passed to the probe.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

import structlog


class CredentialMinterProbe(Protocol):
    """Domain probe for credential minting and verification."""

    def credential_minted(self, tenant_id: str, expires_at: datetime) -> None:
        """Record that a scoped credential was issued."""
        ...

    def signing_key_missing(self) -> None:
        """Record that minting was attempted without a signing key."""
        ...

    def credential_rejected(self, reason: str) -> None:
        """Record that a credential failed verification."""
        ...


class DefaultCredentialMinterProbe:
    """Default implementation of CredentialMinterProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def credential_minted(self, tenant_id: str, expires_at: datetime) -> None:
        self._logger.info(
            "credential_minted",
            tenant_id=tenant_id,
            expires_at=expires_at.isoformat(),
        )

    def signing_key_missing(self) -> None:
        self._logger.error("credential_signing_key_missing")

    def credential_rejected(self, reason: str) -> None:
        self._logger.warning("credential_rejected", reason=reason)
