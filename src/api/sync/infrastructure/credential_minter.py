"""Scoped credential minting for job function calls.

Issues HS256-signed JWTs asserting a tenant with the fixed ``admin`` role.
Credentials live for five minutes, are created per dispatch and are never
persisted.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Callable

from jose import JWTError, jwt

from sync.domain.exceptions import ConfigurationError
from sync.domain.value_objects import TenantId
from sync.infrastructure.observability import DefaultCredentialMinterProbe

if TYPE_CHECKING:
    from sync.infrastructure.observability import CredentialMinterProbe

CREDENTIAL_ALGORITHM = "HS256"
CREDENTIAL_LIFETIME = timedelta(minutes=5)
CREDENTIAL_ROLE = "admin"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InvalidCredentialError(Exception):
    """Raised when a scoped credential fails verification."""

    pass


class CredentialMinter:
    """Signs and verifies tenant-scoped credentials.

    The signing key is process-wide configuration passed in once at start;
    it is never derived from a request.
    """

    def __init__(
        self,
        secret: str,
        probe: CredentialMinterProbe | None = None,
        lifetime: timedelta = CREDENTIAL_LIFETIME,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the minter.

        Args:
            secret: HMAC signing key
            probe: Observability probe
            lifetime: Credential lifetime (default: 5 minutes)
            clock: Source of the current UTC time
        """
        self._secret = secret
        self._probe = probe or DefaultCredentialMinterProbe()
        self._lifetime = lifetime
        self._clock = clock

    def mint(self, tenant_id: TenantId) -> str:
        """Issue a credential for the tenant.

        Claims carry the tenant as ``sub`` and as the platform's ``userId``,
        the ``admin`` role, ``iat`` and ``exp``.

        Raises:
            ConfigurationError: If no signing key is configured
        """
        if not self._secret:
            self._probe.signing_key_missing()
            raise ConfigurationError(
                "Server misconfigured: credential signing secret missing"
            )

        issued_at = self._clock()
        expires_at = issued_at + self._lifetime
        claims = {
            "sub": tenant_id.value,
            "userId": tenant_id.value,
            "role": CREDENTIAL_ROLE,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self._secret, algorithm=CREDENTIAL_ALGORITHM)

        self._probe.credential_minted(tenant_id=tenant_id.value, expires_at=expires_at)
        return token

    def verify(self, token: str, now: datetime | None = None) -> dict[str, Any]:
        """Verify a credential's signature and expiry.

        Args:
            token: The encoded credential
            now: Instant to check expiry against (default: the minter's clock)

        Returns:
            The decoded claims

        Raises:
            InvalidCredentialError: If the signature, role or expiry is invalid
        """
        try:
            # Expiry is checked below against the injected clock
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[CREDENTIAL_ALGORITHM],
                options={"verify_exp": False, "verify_aud": False},
            )
        except JWTError as e:
            self._probe.credential_rejected(reason=f"JWT error: {e}")
            raise InvalidCredentialError(f"Invalid credential: {e}") from e

        expires_at = claims.get("exp")
        if not isinstance(expires_at, int):
            self._probe.credential_rejected(reason="Missing exp claim")
            raise InvalidCredentialError("Missing required claim: exp")

        checked_at = now or self._clock()
        if checked_at.timestamp() >= expires_at:
            self._probe.credential_rejected(reason="Credential expired")
            raise InvalidCredentialError("Credential has expired")

        if claims.get("role") != CREDENTIAL_ROLE:
            self._probe.credential_rejected(reason="Unexpected role")
            raise InvalidCredentialError("Invalid role claim")

        return claims
