"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
Required values (credential secret, platform URL, Shopify app credentials)
are checked once at process start by ``infrastructure.container.configure``.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_CREDENTIAL_SECRET_LENGTH = 32


class DatabaseSettings(BaseSettings):
    """Backing-store connection settings.

    Environment variables:
        BRIDGE_DB_HOST: Database host (default: localhost)
        BRIDGE_DB_PORT: Database port (default: 5432)
        BRIDGE_DB_DATABASE: Database name (default: postgres)
        BRIDGE_DB_USERNAME: Service role user (default: postgres)
        BRIDGE_DB_PASSWORD: Service role password (required in production)
        BRIDGE_DB_PRIVATE_SCHEMA: Schema holding the shop binding table (default: app_private)
        BRIDGE_DB_POOL_SIZE: Connections kept in the pool (default: 5)
        BRIDGE_DB_CONNECT_TIMEOUT_SECONDS: Connect timeout (default: 5)
    """

    model_config = SettingsConfigDict(
        env_prefix="BRIDGE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="postgres", description="Database name")
    username: str = Field(default="postgres", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    private_schema: str = Field(
        default="app_private",
        description="Schema that holds the shop-to-tenant binding table",
    )
    pool_size: int = Field(
        default=5,
        description="Connections kept in the pool",
        ge=1,
        le=100,
    )
    connect_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for establishing a connection",
        gt=0,
    )

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class PlatformSettings(BaseSettings):
    """Settings for the multi-tenant platform that runs the sync jobs.

    Environment variables:
        BRIDGE_PLATFORM_URL: Platform base URL
        BRIDGE_PLATFORM_FUNCTIONS_BASE_URL: Job function base URL
            (default: {BRIDGE_PLATFORM_URL}/functions/v1)
        BRIDGE_PLATFORM_CREDENTIAL_SECRET: HMAC secret for scoped credentials
        BRIDGE_PLATFORM_PULL_FUNCTION: Pull job function name
        BRIDGE_PLATFORM_PUSH_FUNCTION: Push job function name
        BRIDGE_PLATFORM_JOB_TIMEOUT_SECONDS: Timeout for a single job call
    """

    model_config = SettingsConfigDict(
        env_prefix="BRIDGE_PLATFORM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(default="", description="Platform base URL")
    functions_base_url: str | None = Field(
        default=None,
        description="Base URL of the job functions (overrides the derived URL)",
    )
    credential_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Secret used to sign scoped credentials (HS256)",
    )
    pull_function: str = Field(
        default="shopify-pull-products",
        description="Name of the job function pulling products",
    )
    push_function: str = Field(
        default="shopify-push-products",
        description="Name of the job function pushing products",
    )
    job_timeout_seconds: float = Field(
        default=60.0,
        description="Timeout for a single job function call",
        gt=0,
    )

    @property
    def effective_functions_base_url(self) -> str:
        """Get the job function base URL.

        Falls back to ``{url}/functions/v1`` when no explicit base is set.
        """
        if self.functions_base_url:
            return self.functions_base_url.rstrip("/")
        if not self.url:
            return ""
        return f"{self.url.rstrip('/')}/functions/v1"


class ShopifySettings(BaseSettings):
    """Embedded app credentials used to verify shop session tokens.

    Environment variables:
        BRIDGE_SHOPIFY_API_KEY: App API key (session token audience)
        BRIDGE_SHOPIFY_API_SECRET: App API secret (session token signing key)
    """

    model_config = SettingsConfigDict(
        env_prefix="BRIDGE_SHOPIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str = Field(default="", description="App API key")
    api_secret: SecretStr = Field(
        default=SecretStr(""),
        description="App API secret",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Storefront Sync Bridge", description="Application name")
    environment: Literal["development", "production", "test"] = Field(
        default="development",
        description="Deployment environment",
    )
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_production(self) -> bool:
        """Whether error responses must be sanitized."""
        return self.environment == "production"

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def platform(self) -> PlatformSettings:
        """Get platform settings."""
        return get_platform_settings()

    @property
    def shopify(self) -> ShopifySettings:
        """Get Shopify app settings."""
        return get_shopify_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache
def get_platform_settings() -> PlatformSettings:
    """Get cached platform settings."""
    return PlatformSettings()


@lru_cache
def get_shopify_settings() -> ShopifySettings:
    """Get cached Shopify app settings."""
    return ShopifySettings()
