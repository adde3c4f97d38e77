"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from access.presentation import routes as access_routes
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from shared_kernel.webhook import InvalidSignatureError


@asynccontextmanager
async def webhook_lifespan(app: FastAPI):
    """Application lifespan context.

    Configures logging on startup. The service keeps no resources between
    requests, so there is nothing to release on shutdown.
    """
    settings = get_settings()
    configure_logging(level="DEBUG" if settings.debug else settings.log_level)
    structlog.get_logger().info(
        "application_started", app_name=settings.app_name, version=__version__
    )
    yield


app = FastAPI(
    title="GitHub Organization Access Webhook",
    description="Reconciles access grants and revokes into GitHub organization roles",
    version=__version__,
    lifespan=webhook_lifespan,
)

app.include_router(access_routes.router)
app.add_exception_handler(
    InvalidSignatureError, access_routes.invalid_signature_handler
)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
