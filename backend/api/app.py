"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import AxysError

from .dependencies import get_container
from .models.errors import status_code_for
from .routes import health
from modules.session.routes import router as session_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Attaches the session state machine to the app lifecycle channel and
    starts bootstrap in the background, so the splash route is served
    while the persisted session is being recovered.
    """
    # Startup
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    logger.info(f"Starting {settings.app_name} API on {settings.host}:{settings.port}")

    machine = get_container().session
    async with machine:
        bootstrap = asyncio.create_task(machine.bootstrap())
        yield
        # Shutdown
        if not bootstrap.done():
            bootstrap.cancel()
            try:
                await bootstrap
            except asyncio.CancelledError:
                pass
    logger.info(f"Shutting down {settings.app_name} API")


async def handle_axys_error(request: Request, exc: AxysError) -> JSONResponse:
    """Render application errors as ErrorResponse bodies."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Authentication session orchestration for the Axys banking app",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(AxysError, handle_axys_error)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(session_router, prefix="/api/auth", tags=["auth"])

    return app


# Application instance for uvicorn
app = create_app()
