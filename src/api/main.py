"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.container import configure
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from shared_kernel.middleware import bind_request_context
from sync.presentation import register_error_handlers
from sync.presentation import router as sync_router


@asynccontextmanager
async def bridge_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Configuration validation and client construction (fails fast on
      missing or invalid settings, before any request is served)
    - Disposal of the database pool and the job HTTP client on shutdown
    """
    container = configure(get_settings())
    app.state.container = container
    try:
        yield
    finally:
        await container.dispose()
        app.state.container = None


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    settings = get_settings()
    configure_logging(debug=settings.debug)

    application = FastAPI(
        title=settings.app_name,
        description="Bridges storefront shop sessions to platform tenants and sync jobs",
        version=__version__,
        lifespan=bridge_lifespan,
    )
    application.middleware("http")(bind_request_context)
    register_error_handlers(application)

    # Include Sync bounded context routes
    application.include_router(sync_router)

    @application.get("/health")
    def health():
        """Basic health check endpoint."""
        return {"status": "ok"}

    return application


app = create_app()
