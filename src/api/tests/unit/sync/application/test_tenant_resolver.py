"""Unit tests for TenantResolver."""

from unittest.mock import AsyncMock, Mock, create_autospec

import pytest

from sync.application.observability import TenantResolverProbe
from sync.application.services import TenantResolver
from sync.domain.exceptions import BackingStoreError
from sync.domain.value_objects import (
    ShopIdentity,
    SyncErrorType,
    TenantId,
    TenantResolution,
)
from sync.ports.repositories import ITenantBindingRepository


@pytest.fixture
def mock_binding_repo():
    """Mock binding repository returning a linked tenant by default."""
    repo = Mock(spec=ITenantBindingRepository)
    repo.find_tenant_id = AsyncMock(return_value="tenant_123")
    return repo


@pytest.fixture
def mock_probe():
    return create_autospec(TenantResolverProbe, instance=True)


@pytest.fixture
def resolver(mock_binding_repo, mock_probe):
    return TenantResolver(mock_binding_repo, probe=mock_probe)


class TestResolveLinked:
    """Tests for shops with a tenant binding."""

    @pytest.mark.asyncio
    async def test_returns_tenant_for_bound_shop(
        self, resolver, mock_binding_repo, mock_probe
    ):
        result = await resolver.resolve("test-store.myshopify.com")

        assert result == TenantResolution(tenant_id=TenantId(value="tenant_123"))
        assert result.is_linked
        mock_binding_repo.find_tenant_id.assert_awaited_once_with(
            ShopIdentity(value="test-store.myshopify.com")
        )
        mock_probe.tenant_resolved.assert_called_once_with(
            "test-store.myshopify.com", "tenant_123"
        )

    @pytest.mark.asyncio
    async def test_looks_up_normalized_identity(self, resolver, mock_binding_repo):
        """Lookups use the lower-cased, trimmed domain."""
        await resolver.resolve(" Test-Store.MYSHOPIFY.com")

        mock_binding_repo.find_tenant_id.assert_awaited_once_with(
            ShopIdentity(value="test-store.myshopify.com")
        )

    @pytest.mark.asyncio
    async def test_trims_stored_tenant_id(self, resolver, mock_binding_repo):
        mock_binding_repo.find_tenant_id.return_value = " tenant_123 "

        result = await resolver.resolve("test-store.myshopify.com")

        assert result.tenant_id == TenantId(value="tenant_123")


class TestResolveNotLinked:
    """Tests for shops without a binding."""

    @pytest.mark.asyncio
    async def test_missing_binding_is_not_an_error(
        self, resolver, mock_binding_repo, mock_probe
    ):
        mock_binding_repo.find_tenant_id.return_value = None

        result = await resolver.resolve("test-store.myshopify.com")

        assert result.tenant_id is None
        assert result.error is None
        assert not result.is_linked
        mock_probe.tenant_not_linked.assert_called_once_with(
            "test-store.myshopify.com"
        )


class TestResolveFailures:
    """Tests for classified failures returned as values."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("shop", [None, 42, "", "not-a-shop.com"])
    async def test_invalid_shape_never_queries(
        self, resolver, mock_binding_repo, mock_probe, shop
    ):
        """Malformed identities are rejected before any backing-store call."""
        result = await resolver.resolve(shop)

        assert result.tenant_id is None
        assert result.error is not None
        assert result.error.error_type is SyncErrorType.INVALID_SHAPE
        assert result.error.status_code == 400
        mock_binding_repo.find_tenant_id.assert_not_called()
        mock_probe.tenant_lookup_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_backing_store_error_is_returned(self, resolver, mock_binding_repo):
        mock_binding_repo.find_tenant_id.side_effect = BackingStoreError(
            "Permission denied",
            error_type=SyncErrorType.PERMISSION_DENIED,
            status_code=403,
            details="42501",
        )

        result = await resolver.resolve("test-store.myshopify.com")

        assert result.tenant_id is None
        assert result.error.error_type is SyncErrorType.PERMISSION_DENIED
        assert result.error.message == "Permission denied"
        assert result.error.details == "42501"
        assert result.error.status_code == 403

    @pytest.mark.asyncio
    async def test_invalid_stored_tenant_is_unknown_failure(
        self, resolver, mock_binding_repo, mock_probe
    ):
        """A stored id with disallowed characters never reaches the minter."""
        mock_binding_repo.find_tenant_id.return_value = "tenant; DROP TABLE"

        result = await resolver.resolve("test-store.myshopify.com")

        assert result.tenant_id is None
        assert result.error.error_type is SyncErrorType.UNKNOWN
        assert "Invalid tenant ID format" in result.error.message
        mock_probe.tenant_resolved.assert_not_called()
