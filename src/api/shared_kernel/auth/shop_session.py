"""Shop session token validation for the embedded app.

The storefront admin sends a session token signed with the app's API
secret (HS256). A valid token names the shop in its ``dest`` claim; that
shop domain is the identity every sync request acts for.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import ShopSessionProbe

SESSION_TOKEN_ALGORITHM = "HS256"


@dataclass(frozen=True)
class ShopSession:
    """Validated shop session."""

    shop: str
    user_id: str | None


class InvalidSessionTokenError(Exception):
    """Raised when session token validation fails."""

    pass


class ShopSessionValidator:
    """Validates embedded-app session tokens.

    Checks the signature against the API secret, the audience against the
    API key, and ``exp``/``nbf``.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        probe: ShopSessionProbe,
    ):
        """Initialize the validator.

        Args:
            api_key: App API key, expected as the ``aud`` claim.
            api_secret: App API secret used to sign session tokens.
            probe: Observability probe for logging events.
        """
        self._api_key = api_key
        self._api_secret = api_secret
        self._probe = probe

    def validate_token(self, token: str) -> ShopSession:
        """Validate a session token and return the shop it belongs to.

        Args:
            token: The session token string.

        Returns:
            ShopSession with the shop domain from the ``dest`` claim.

        Raises:
            InvalidSessionTokenError: If the token is invalid or expired.
        """
        try:
            claims = jwt.decode(
                token=token,
                key=self._api_secret,
                algorithms=[SESSION_TOKEN_ALGORITHM],
                audience=self._api_key,
                options={
                    "verify_signature": True,
                    "verify_aud": True,
                    "verify_exp": True,
                    "verify_nbf": True,
                    "require_aud": True,
                    "require_exp": True,
                },
            )
        except ExpiredSignatureError as e:
            self._probe.session_token_rejected(reason="Token expired")
            raise InvalidSessionTokenError("Session token has expired") from e
        except JWTClaimsError as e:
            if "audience" in str(e).lower():
                self._probe.session_token_rejected(reason="Invalid audience")
                raise InvalidSessionTokenError("Invalid audience claim") from e
            self._probe.session_token_rejected(reason=f"Claims error: {e}")
            raise InvalidSessionTokenError(f"Invalid session token claims: {e}") from e
        except JWTError as e:
            self._probe.session_token_rejected(reason=f"JWT error: {e}")
            raise InvalidSessionTokenError(f"Invalid session token: {e}") from e

        shop = self._shop_from_dest(claims.get("dest"))
        if shop is None:
            self._probe.session_token_rejected(reason="Missing or invalid dest claim")
            raise InvalidSessionTokenError("Missing required claim: dest")

        user_id = claims.get("sub")
        self._probe.session_token_validated(shop=shop)
        return ShopSession(
            shop=shop,
            user_id=str(user_id) if user_id is not None else None,
        )

    @staticmethod
    def _shop_from_dest(dest: object) -> str | None:
        """Extract the shop host from ``dest`` (``https://{shop}``)."""
        if not isinstance(dest, str) or not dest:
            return None
        host = urlparse(dest).hostname
        return host or None
