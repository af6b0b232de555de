"""Unit tests for shop session token validation."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from shared_kernel.auth import (
    InvalidSessionTokenError,
    ShopSession,
    ShopSessionProbe,
    ShopSessionValidator,
)


@pytest.fixture
def mock_probe() -> MagicMock:
    """Create a mock probe."""
    return MagicMock(spec=ShopSessionProbe)


@pytest.fixture
def validator(mock_probe: MagicMock) -> ShopSessionValidator:
    """Create a validator for the test app credentials."""
    return ShopSessionValidator(
        api_key="test-app-api-key",
        api_secret="test-app-api-secret",
        probe=mock_probe,
    )


class TestValidateToken:
    """Tests for ShopSessionValidator.validate_token."""

    def test_valid_token_yields_shop_from_dest(self, validator, session_token, mock_probe):
        session = validator.validate_token(session_token())

        assert session == ShopSession(shop="test-store.myshopify.com", user_id="42")
        mock_probe.session_token_validated.assert_called_once_with(
            shop="test-store.myshopify.com"
        )

    def test_expired_token_is_rejected(self, validator, session_token, mock_probe):
        token = session_token(expires_in=timedelta(minutes=-1))

        with pytest.raises(InvalidSessionTokenError, match="expired"):
            validator.validate_token(token)

        mock_probe.session_token_rejected.assert_called_once_with(reason="Token expired")

    def test_wrong_audience_is_rejected(self, validator, session_token):
        with pytest.raises(InvalidSessionTokenError, match="audience"):
            validator.validate_token(session_token(audience="another-app"))

    def test_wrong_secret_is_rejected(self, validator, session_token):
        with pytest.raises(InvalidSessionTokenError):
            validator.validate_token(session_token(secret="not-the-app-secret"))

    def test_malformed_token_is_rejected(self, validator, mock_probe):
        with pytest.raises(InvalidSessionTokenError):
            validator.validate_token("not-a-jwt")

        mock_probe.session_token_rejected.assert_called_once()

    def test_missing_dest_is_rejected(self, validator, session_token):
        with pytest.raises(InvalidSessionTokenError, match="dest"):
            validator.validate_token(session_token(dest=""))
