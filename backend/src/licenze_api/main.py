"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from licenze_api import __version__
from licenze_api.config import get_settings
from licenze_api.exceptions import LicenzeAPIError
from licenze_api.middleware.error_handler import (
    domain_exception_handler,
    generic_exception_handler,
    sqlalchemy_exception_handler,
)
from licenze_api.routers import renewals
from licenze_api.security.rate_limit import limiter
from licenze_api.tasks.scheduler import start_scheduler, stop_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings = get_settings()
    if settings.renewal_enabled:
        await start_scheduler()
    else:
        logger.warning("Automatic renewal disabled by configuration")
    yield
    await stop_scheduler()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_settings()

    app = FastAPI(
        title=config.app_name,
        version=__version__,
        description="License renewal and activation API",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(LicenzeAPIError, domain_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(renewals.router, prefix="/api/v1/renewals", tags=["Renewals"])

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
