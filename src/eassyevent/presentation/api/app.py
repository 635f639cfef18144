"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.

Run with uvicorn's factory mode:
    uvicorn eassyevent.presentation.api.app:create_app --factory
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from eassyevent.presentation.api.config import (
    API_V1_PREFIX,
    API_VERSION,
    get_api_settings,
)
from eassyevent.presentation.api.dependencies import (
    create_engine,
    create_session_maker,
)
from eassyevent.presentation.api.exception_handlers import (
    setup_exception_handlers,
)
from eassyevent.presentation.api.rate_limit import setup_rate_limiting
from eassyevent.presentation.api.routers import auth_router
from eassyevent.presentation.api.schemas import HealthResponse
from eassyevent_config.settings import Settings
from eassyevent_identity.infrastructure.persistence.sqlalchemy import IdentityBase

logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings) -> None:
    """Configure application logging.

    Sets up logging for the eassyevent application with:
    - Console output with timestamps and module names
    - Configurable log level for eassyevent modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    # Set levels for our application
    logging.getLogger("eassyevent").setLevel(log_level)
    logging.getLogger("eassyevent_identity").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Venue-owner accounts and session management.

**Signup & Login:**
- Sign up with email, password and venue profile
- Verify the email address before logging in
- Login to obtain an access token (refresh token in an HttpOnly cookie)

**Security:**
- Passwords are hashed with bcrypt
- Verification and reset tokens are stored as sha256 digests
- Account lockout for 2 hours after 5 failed attempts
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager, bound to the engine in ``app.state``."""
    logger.info("Starting EassyEvent API v%s...", API_VERSION)
    engine: AsyncEngine = app.state.engine
    await _init_database_schema(engine)
    yield

    logger.info("Shutting down EassyEvent API...")
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    logger.info("Initializing database schema...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(IdentityBase.metadata.create_all)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    logger.info("Database schema initialized successfully")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()
    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing. When given, every
        dependency that reads settings receives this instance.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_api_settings()

    _configure_logging(settings)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Venue booking backend: accounts and authentication.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.dependency_overrides[get_api_settings] = lambda: settings

    # One engine per application, built from its own settings
    app.state.engine = create_engine(settings)
    app.state.session_maker = create_session_maker(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    setup_rate_limiting(app, settings)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint, unversioned for load balancers."""
        return HealthResponse(status="healthy", version=API_VERSION)

    return app
