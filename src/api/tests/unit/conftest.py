"""Unit test fixtures with mocked dependencies."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from pydantic import SecretStr

TEST_CREDENTIAL_SECRET = "test-credential-secret-0123456789abcdef"
TEST_API_KEY = "test-app-api-key"
TEST_API_SECRET = "test-app-api-secret"
TEST_SHOP = "test-store.myshopify.com"
TEST_TENANT = "tenant_123"
FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password=SecretStr("testpass"),
    )


@pytest.fixture
def mock_platform_settings():
    """Provide test platform settings."""
    from infrastructure.settings import PlatformSettings

    return PlatformSettings(
        url="https://platform.example.com",
        credential_secret=SecretStr(TEST_CREDENTIAL_SECRET),
    )


@pytest.fixture
def mock_shopify_settings():
    """Provide test embedded app credentials."""
    from infrastructure.settings import ShopifySettings

    return ShopifySettings(
        api_key=TEST_API_KEY,
        api_secret=SecretStr(TEST_API_SECRET),
    )


@pytest.fixture
def shop_identity():
    """Provide a validated shop identity."""
    from sync.domain.value_objects import ShopIdentity

    return ShopIdentity(value=TEST_SHOP)


@pytest.fixture
def tenant_id():
    """Provide a validated tenant id."""
    from sync.domain.value_objects import TenantId

    return TenantId(value=TEST_TENANT)


@pytest.fixture
def session_token():
    """Build embedded-app session tokens signed with the test API secret."""

    def _make(
        shop: str = TEST_SHOP,
        audience: str = TEST_API_KEY,
        secret: str = TEST_API_SECRET,
        expires_in: timedelta = timedelta(minutes=1),
        **extra_claims,
    ) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "iss": f"https://{shop}/admin",
            "dest": f"https://{shop}",
            "aud": audience,
            "sub": "42",
            "iat": int(now.timestamp()),
            "nbf": int(now.timestamp()),
            "exp": int((now + expires_in).timestamp()),
            **extra_claims,
        }
        return jwt.encode(claims, secret, algorithm="HS256")

    return _make
