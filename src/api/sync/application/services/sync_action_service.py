"""Action request orchestration.

Runs the write path in a fixed order: validate the body and intent,
resolve the tenant, mint a scoped credential, dispatch. Intent
validation happens before resolution, so a malformed request never
reaches the backing store or the credential minter.
"""

from __future__ import annotations

from typing import Any

from sync.application.observability import DefaultSyncActionProbe, SyncActionProbe
from sync.application.services.sync_dispatcher import SyncDispatcher
from sync.application.services.tenant_resolver import TenantResolver
from sync.domain.exceptions import (
    InvalidShapeError,
    NotLinkedError,
    SyncError,
    TenantResolutionError,
)
from sync.domain.validation import validate_intent
from sync.domain.value_objects import DispatchResult
from sync.ports.credentials import ICredentialMinter

NOT_LINKED_MESSAGE = (
    "Shop not linked to a platform tenant yet. Connect this shop from the "
    "platform app first."
)


class SyncActionService:
    """Application service for ``POST /api/sync``."""

    def __init__(
        self,
        resolver: TenantResolver,
        minter: ICredentialMinter,
        dispatcher: SyncDispatcher,
        probe: SyncActionProbe | None = None,
    ):
        self._resolver = resolver
        self._minter = minter
        self._dispatcher = dispatcher
        self._probe = probe or DefaultSyncActionProbe()

    async def perform(self, shop_identity: str, body: Any) -> DispatchResult:
        """Perform an action request for a shop.

        Args:
            shop_identity: Shop domain from the authenticated session
            body: Decoded JSON request body

        Returns:
            DispatchResult to relay to the caller

        Raises:
            InvalidShapeError: If the body or intent is malformed
            TenantResolutionError: If the tenant lookup failed
            NotLinkedError: If the shop has no tenant binding
            SyncError: Any other classified failure from minting or dispatch
        """
        try:
            return await self._perform(shop_identity, body)
        except SyncError:
            raise
        except Exception as e:
            self._probe.action_failed(shop_identity, operation="perform", error=e)
            raise

    async def _perform(self, shop_identity: str, body: Any) -> DispatchResult:
        if not isinstance(body, dict):
            raise self._rejected(
                shop_identity, InvalidShapeError("Request body must be a JSON object")
            )

        try:
            intent = validate_intent(body.get("intent"))
        except InvalidShapeError as e:
            raise self._rejected(shop_identity, e)

        resolution = await self._resolver.resolve(shop_identity)
        if resolution.error is not None:
            raise TenantResolutionError(resolution.error)
        tenant_id = resolution.tenant_id
        if tenant_id is None:
            raise self._rejected(shop_identity, NotLinkedError(NOT_LINKED_MESSAGE))

        token = self._minter.mint(tenant_id)
        return await self._dispatcher.dispatch(intent, tenant_id, token, body)

    def _rejected(self, shop_identity: str, error: SyncError) -> SyncError:
        self._probe.action_rejected(
            shop_identity,
            error_type=error.error_type.value,
            reason=error.message,
        )
        return error
