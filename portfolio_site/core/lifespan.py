"""Application lifespan management."""

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI

from portfolio_site import __version__
from portfolio_site.config import get_settings
from portfolio_site.logging_config import get_logger, log_with_context
from portfolio_site.middleware.logging_middleware import redact_authorization, redact_sensitive_data
from portfolio_site.services.now_playing import NowPlayingPoller, build_token_source
from portfolio_site.state_managers import CommentStore

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """Event hook to log outbound requests with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        authorization=redact_authorization(request.headers.get("Authorization")),
        event_type="http_request",
    )


async def log_response(response: httpx.Response) -> None:
    """Event hook to log upstream responses with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def create_http_client() -> httpx.AsyncClient:
    """Shared outbound client with connection pooling and granular timeouts."""
    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [log_request],
        "response": [log_response],
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=5.0,
            read=10.0,
            write=5.0,
            pool=5.0,
        ),
        limits=httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,
        ),
        follow_redirects=True,
        event_hooks=event_hooks,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create shared resources on startup and release them on shutdown.

    Exceptions raised while the app is running are logged and re-raised so
    cleanup still runs.
    """
    settings = get_settings()
    app.state.startup_time = time.time()
    app.state.request_count = 0

    log_with_context(
        logger,
        "info",
        "Starting portfolio site",
        version=__version__,
        event_type="app_startup",
    )

    client = create_http_client()
    app.state.http_client = client

    app.state.comment_store = CommentStore()
    await app.state.comment_store.initialize()

    token_source = build_token_source(client, settings)
    poller = NowPlayingPoller(
        client,
        token_source,
        interval=settings.now_playing_poll_interval,
        url=settings.spotify_currently_playing_url,
    )
    app.state.now_playing_poller = poller
    if settings.now_playing_enabled:
        await poller.initialize()
        log_with_context(
            logger,
            "info",
            "Now-playing poller started",
            interval_seconds=settings.now_playing_poll_interval,
            token_source=type(token_source).__name__,
            event_type="now_playing_started",
        )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(logger, "info", "Shutting down portfolio site", event_type="app_shutdown")

        # Stop polling before the client it uses goes away
        await poller.cleanup()
        await app.state.comment_store.cleanup()
        await client.aclose()
        log_with_context(logger, "info", "HTTP client closed", event_type="http_client_cleanup")
