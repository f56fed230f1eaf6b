"""Middleware configuration."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address

from portfolio_site.config import Settings
from portfolio_site.logging_config import get_logger, log_with_context
from portfolio_site.security import get_cors_origins, get_trusted_hosts

logger = get_logger(__name__)

# Shared rate limiter; routes opt in with @limiter.limit(...)
limiter = Limiter(key_func=get_remote_address)


def setup_middleware(app: FastAPI, settings: Settings) -> Limiter:
    """Configure CORS, trusted hosts, rate limiting and request counting.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        Limiter instance for rate limiting
    """
    cors_origins = get_cors_origins(settings)
    log_with_context(
        logger,
        "info",
        "Configuring CORS middleware",
        origins=cors_origins,
        event_type="security_config",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Trusted hosts - prevent host header injection
    trusted_hosts = get_trusted_hosts(settings)
    log_with_context(
        logger,
        "info",
        "Configuring TrustedHost middleware",
        hosts=trusted_hosts,
        event_type="security_config",
    )
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=trusted_hosts,
    )

    @app.middleware("http")
    async def count_requests(request: Request, call_next):
        """Count total requests for the readiness endpoint."""
        app.state.request_count = getattr(app.state, "request_count", 0) + 1
        return await call_next(request)

    app.state.limiter = limiter
    return limiter
