"""Unit tests for SyncActionService.

The minter used here is the real CredentialMinter so the credential that
reaches the dispatcher can be decoded and checked.
"""

from unittest.mock import AsyncMock, Mock, create_autospec

import pytest
from jose import jwt

from sync.application.observability import SyncActionProbe
from sync.application.services import SyncActionService, SyncDispatcher, TenantResolver
from sync.domain.exceptions import (
    ConfigurationError,
    InvalidShapeError,
    NotLinkedError,
    TenantResolutionError,
)
from sync.domain.value_objects import (
    ConnectionFailure,
    DispatchResult,
    SyncErrorType,
    SyncIntent,
    TenantId,
    TenantResolution,
)
from sync.infrastructure.credential_minter import CredentialMinter

SECRET = "test-credential-secret-0123456789abcdef"
SHOP = "test-store.myshopify.com"


@pytest.fixture
def mock_resolver():
    resolver = Mock(spec=TenantResolver)
    resolver.resolve = AsyncMock(
        return_value=TenantResolution(tenant_id=TenantId(value="tenant_123"))
    )
    return resolver


@pytest.fixture
def minter():
    minter = CredentialMinter(SECRET)
    return Mock(wraps=minter)


@pytest.fixture
def mock_dispatcher():
    dispatcher = Mock(spec=SyncDispatcher)
    dispatcher.dispatch = AsyncMock(
        return_value=DispatchResult(status_code=200, body={"success": True})
    )
    return dispatcher


@pytest.fixture
def mock_probe():
    return create_autospec(SyncActionProbe, instance=True)


@pytest.fixture
def service(mock_resolver, minter, mock_dispatcher, mock_probe):
    return SyncActionService(mock_resolver, minter, mock_dispatcher, probe=mock_probe)


class TestPerformSuccess:
    """Tests for the happy path."""

    @pytest.mark.asyncio
    async def test_pull_dispatches_with_tenant_scoped_credential(
        self, service, minter, mock_dispatcher
    ):
        body = {"intent": "pull"}

        result = await service.perform(SHOP, body)

        assert result == DispatchResult(status_code=200, body={"success": True})
        minter.mint.assert_called_once_with(TenantId(value="tenant_123"))

        intent, tenant_id, token, sent_body = mock_dispatcher.dispatch.await_args.args
        assert intent is SyncIntent.PULL
        assert tenant_id == TenantId(value="tenant_123")
        assert sent_body is body

        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert claims["sub"] == "tenant_123"
        assert claims["role"] == "admin"

    @pytest.mark.asyncio
    async def test_toggle_also_mints(self, service, minter, mock_dispatcher):
        await service.perform(SHOP, {"intent": "toggle_auto", "enabled": True})

        minter.mint.assert_called_once()
        assert mock_dispatcher.dispatch.await_args.args[0] is SyncIntent.TOGGLE_AUTO


class TestPerformRejections:
    """Tests for requests that never reach the dispatcher."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [None, [], "pull", 42])
    async def test_non_object_body_is_invalid_shape(
        self, service, mock_resolver, minter, body
    ):
        with pytest.raises(InvalidShapeError, match="JSON object"):
            await service.perform(SHOP, body)

        mock_resolver.resolve.assert_not_called()
        minter.mint.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body", [{}, {"intent": "delete_everything"}, {"intent": 1}]
    )
    async def test_invalid_intent_never_mints(
        self, service, mock_resolver, minter, mock_dispatcher, mock_probe, body
    ):
        with pytest.raises(InvalidShapeError):
            await service.perform(SHOP, body)

        assert minter.mint.call_count == 0
        mock_resolver.resolve.assert_not_called()
        mock_dispatcher.dispatch.assert_not_called()
        mock_probe.action_rejected.assert_called_once()

    @pytest.mark.asyncio
    async def test_unlinked_shop_is_not_linked(
        self, service, mock_resolver, minter, mock_dispatcher
    ):
        mock_resolver.resolve.return_value = TenantResolution()

        with pytest.raises(NotLinkedError) as exc_info:
            await service.perform(SHOP, {"intent": "pull"})

        assert exc_info.value.status_code == 409
        minter.mint.assert_not_called()
        mock_dispatcher.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_resolution_error_keeps_classification(
        self, service, mock_resolver, minter
    ):
        failure = ConnectionFailure(
            error_type=SyncErrorType.PERMISSION_DENIED,
            message="Permission denied",
            details="42501",
            status_code=403,
        )
        mock_resolver.resolve.return_value = TenantResolution(error=failure)

        with pytest.raises(TenantResolutionError) as exc_info:
            await service.perform(SHOP, {"intent": "push_all"})

        assert exc_info.value.error_type is SyncErrorType.PERMISSION_DENIED
        assert exc_info.value.status_code == 403
        minter.mint.assert_not_called()


class TestPerformFailures:
    """Tests for failures after resolution."""

    @pytest.mark.asyncio
    async def test_missing_secret_is_configuration_error(
        self, mock_resolver, mock_dispatcher, mock_probe
    ):
        service = SyncActionService(
            mock_resolver, CredentialMinter(""), mock_dispatcher, probe=mock_probe
        )

        with pytest.raises(ConfigurationError):
            await service.perform(SHOP, {"intent": "pull"})

        mock_dispatcher.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_unexpected_error_is_recorded_and_reraised(
        self, service, mock_dispatcher, mock_probe
    ):
        mock_dispatcher.dispatch.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await service.perform(SHOP, {"intent": "pull"})

        mock_probe.action_failed.assert_called_once()
