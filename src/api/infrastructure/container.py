"""Explicit two-phase service initialization.

``configure()`` first validates every required setting, then builds the
long-lived client handles (database engine, job client, credential minter,
session validator) and the services that use them. It runs once at
process start; request handlers only read from the resulting container.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from infrastructure.database.engines import create_engine, create_session_factory
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.settings import (
    MIN_CREDENTIAL_SECRET_LENGTH,
    DatabaseSettings,
    PlatformSettings,
    Settings,
    ShopifySettings,
    get_database_settings,
    get_platform_settings,
    get_settings,
    get_shopify_settings,
)
from shared_kernel.auth import DefaultShopSessionProbe, ShopSessionValidator
from sync.application.services import (
    StatusReporter,
    SyncActionService,
    SyncDispatcher,
    SyncHealthService,
    TenantResolver,
)
from sync.application.services.sync_dispatcher import build_job_routes
from sync.domain.exceptions import ConfigurationError
from sync.infrastructure.credential_minter import CredentialMinter
from sync.infrastructure.job_client import HttpJobClient
from sync.infrastructure.models import PRIVATE_SCHEMA, ShopifyShopModel
from sync.infrastructure.sync_settings_repository import SyncSettingsRepository
from sync.infrastructure.tenant_binding_repository import TenantBindingRepository
from sync.ports.jobs import IJobClient


@dataclass(frozen=True)
class ServiceContainer:
    """Long-lived handles and services shared by all requests."""

    settings: Settings
    engine: AsyncEngine
    job_client: IJobClient
    session_validator: ShopSessionValidator
    status_reporter: StatusReporter
    action_service: SyncActionService
    health_service: SyncHealthService
    probe: StartupProbe

    async def dispose(self) -> None:
        """Close the job client and the engine's connection pool."""
        await self.job_client.aclose()
        await self.engine.dispose()
        self.probe.services_disposed()


def validate_configuration(
    database: DatabaseSettings,
    platform: PlatformSettings,
    shopify: ShopifySettings,
    probe: StartupProbe | None = None,
) -> None:
    """Check every required setting before anything is built.

    Raises:
        ConfigurationError: On the first missing or invalid setting
    """
    probe = probe or DefaultStartupProbe()

    def fail(setting: str, reason: str) -> ConfigurationError:
        probe.configuration_invalid(setting=setting, reason=reason)
        return ConfigurationError(f"Server misconfigured: {setting} {reason}")

    secret = platform.credential_secret.get_secret_value()
    if not secret:
        raise fail("BRIDGE_PLATFORM_CREDENTIAL_SECRET", "missing")
    if len(secret) < MIN_CREDENTIAL_SECRET_LENGTH:
        raise fail(
            "BRIDGE_PLATFORM_CREDENTIAL_SECRET",
            f"must be at least {MIN_CREDENTIAL_SECRET_LENGTH} characters",
        )

    functions_base_url = platform.effective_functions_base_url
    if not functions_base_url:
        raise fail("BRIDGE_PLATFORM_URL", "missing")
    parsed = urlparse(functions_base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise fail("BRIDGE_PLATFORM_FUNCTIONS_BASE_URL", "must be an http(s) URL")

    if not shopify.api_key:
        raise fail("BRIDGE_SHOPIFY_API_KEY", "missing")
    if not shopify.api_secret.get_secret_value():
        raise fail("BRIDGE_SHOPIFY_API_SECRET", "missing")

    if not database.host:
        raise fail("BRIDGE_DB_HOST", "missing")


def configure(
    settings: Settings | None = None,
    database: DatabaseSettings | None = None,
    platform: PlatformSettings | None = None,
    shopify: ShopifySettings | None = None,
    probe: StartupProbe | None = None,
    job_transport: httpx.AsyncBaseTransport | None = None,
) -> ServiceContainer:
    """Validate configuration and build the service container.

    Settings default to the cached environment-backed instances.

    Args:
        settings: Application settings
        database: Backing-store connection settings
        platform: Platform and credential settings
        shopify: Embedded app credentials
        probe: Start-up probe
        job_transport: Optional httpx transport for the job client

    Returns:
        The immutable ServiceContainer

    Raises:
        ConfigurationError: If a required setting is missing or invalid
    """
    settings = settings or get_settings()
    database = database or get_database_settings()
    platform = platform or get_platform_settings()
    shopify = shopify or get_shopify_settings()
    probe = probe or DefaultStartupProbe()

    validate_configuration(database, platform, shopify, probe)

    engine = create_engine(
        database,
        schema_translate_map={PRIVATE_SCHEMA: database.private_schema},
    )
    session_factory = create_session_factory(engine)

    binding_repository = TenantBindingRepository(
        session_factory, schema=database.private_schema
    )
    settings_repository = SyncSettingsRepository(session_factory)
    job_client = HttpJobClient(
        platform.effective_functions_base_url,
        timeout=platform.job_timeout_seconds,
        transport=job_transport,
    )

    resolver = TenantResolver(binding_repository)
    dispatcher = SyncDispatcher(
        job_client,
        settings_repository,
        job_routes=build_job_routes(
            pull_function=platform.pull_function,
            push_function=platform.push_function,
        ),
    )
    minter = CredentialMinter(platform.credential_secret.get_secret_value())

    container = ServiceContainer(
        settings=settings,
        engine=engine,
        job_client=job_client,
        session_validator=ShopSessionValidator(
            api_key=shopify.api_key,
            api_secret=shopify.api_secret.get_secret_value(),
            probe=DefaultShopSessionProbe(),
        ),
        status_reporter=StatusReporter(resolver, settings_repository),
        action_service=SyncActionService(resolver, minter, dispatcher),
        health_service=SyncHealthService(
            binding_repository,
            schema_name=database.private_schema,
            table_name=ShopifyShopModel.__tablename__,
            environment=settings.environment,
            configured=bool(database.host and database.username),
        ),
        probe=probe,
    )

    probe.services_configured(
        environment=settings.environment,
        database_host=database.host,
        functions_base_url=platform.effective_functions_base_url,
    )
    return container
