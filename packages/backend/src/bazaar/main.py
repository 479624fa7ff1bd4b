"""FastAPI application factory.

Learn: create_app() returns a configured FastAPI instance. The lifespan
connects optional infrastructure (Redis) at startup and disposes of the
database engine at shutdown. Middleware, error handlers, REST routers and
the websocket relay are all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bazaar import __version__
from bazaar.api import api_router
from bazaar.config import settings
from bazaar.errors import register_error_handlers
from bazaar.logging import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "bazaar.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    from bazaar.realtime.redis import close_redis, init_redis
    try:
        await init_redis()
        logger.info("bazaar.redis_connected")
    except Exception as e:
        # Redis is optional: rate limiting and health degrade without it
        logger.warning("bazaar.redis_unavailable", error=str(e))

    yield

    logger.info("bazaar.shutdown")
    await close_redis()

    from bazaar.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging(settings)

    app = FastAPI(
        title="Bazaar",
        description="Marketplace backend — accounts, community, stores, ledger",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette runs middleware in reverse order of registration.
    # Request flow: CORS → RateLimit → Security → RequestContext → handler

    from bazaar.middleware.rate_limit import RateLimitMiddleware
    from bazaar.middleware.request_context import RequestContextMiddleware
    from bazaar.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        auth_rpm=settings.rate_limit_auth_rpm,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    register_error_handlers(app)

    app.include_router(api_router)

    from bazaar.realtime.relay import router as relay_router
    app.include_router(relay_router)

    return app


# Default app instance (used by uvicorn: bazaar.main:app)
app = create_app()
