"""Health endpoints."""

import time
from datetime import UTC, datetime

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from portfolio_site import __version__
from portfolio_site.config import Settings, get_settings
from portfolio_site.dependencies import get_comment_store, get_http_client, get_now_playing_poller
from portfolio_site.models import HealthResponse, ReadinessChecks, ReadinessResponse, WidgetPhase
from portfolio_site.services.now_playing import NowPlayingPoller
from portfolio_site.state_managers import CommentStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness check. For dependency status, use `/health/ready`."""
    return HealthResponse(version=__version__)


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse, "description": "HTTP client missing or closed"}},
)
async def readiness_check(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    poller: NowPlayingPoller = Depends(get_now_playing_poller),
    store: CommentStore = Depends(get_comment_store),
    settings: Settings = Depends(get_settings),
):
    """Readiness probe.

    Only the shared HTTP client decides readiness. Spotify configuration,
    the poller phase and the comment count are informational, and a halted
    poller does not fail the probe.
    """
    client_ok = client is not None and not client.is_closed

    snapshot = poller.snapshot()
    poller_state = f"error: {snapshot.error}" if snapshot.phase is WidgetPhase.ERROR else snapshot.phase.value
    started = getattr(request.app.state, "startup_time", time.time())

    checks = ReadinessChecks(
        http_client="ok" if client_ok else "failed",
        spotify_config="ok" if settings.spotify_configured else "missing",
        now_playing=poller_state,
        comments=await store.count(),
        uptime_seconds=max(0, int(time.time() - started)),
        requests=getattr(request.app.state, "request_count", 0),
    )

    return JSONResponse(
        status_code=200 if client_ok else 503,
        content=ReadinessResponse(
            status="healthy" if client_ok else "unhealthy",
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )
