"""Spotify token provider and now-playing routes."""

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from portfolio_site.config import Settings, get_settings
from portfolio_site.core.middleware import limiter
from portfolio_site.dependencies import get_http_client, get_now_playing_poller
from portfolio_site.exceptions import ConfigurationException, ErrorCode
from portfolio_site.models import ErrorResponse
from portfolio_site.services import token_provider
from portfolio_site.services.now_playing import NowPlayingPoller, render_now_playing

router = APIRouter()


@router.post(
    "/api/spotify-token",
    summary="Exchange the refresh token for a Spotify access token",
    description="""
    Calls the Spotify accounts service with the server-side credential set and
    returns its JSON body unchanged. No body is accepted and nothing is cached.

    **Rate Limited:** 30 requests/minute
    """,
    responses={
        200: {
            "description": "Token issued",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "BQD...",
                        "token_type": "Bearer",
                        "expires_in": 3600,
                        "scope": "user-read-currently-playing",
                    }
                }
            },
        },
        500: {"model": ErrorResponse, "description": "Missing credentials or Spotify rejected the refresh"},
    },
)
@limiter.limit("30/minute")
async def spotify_token(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Issue a short-lived Spotify access token.

    Errors propagate as PortfolioException and are rendered by the registered
    handler as `500 {"error": {...}}`.
    """
    payload = await token_provider.refresh_access_token(client, settings)
    return JSONResponse(content=payload)


@router.get(
    "/api/spotify/now-playing",
    summary="Current state of the now-playing widget",
    description="Returns the poller's snapshot and the view derived from it. Never calls Spotify directly.",
    responses={
        200: {
            "description": "Widget state",
            "content": {
                "application/json": {
                    "example": {
                        "snapshot": {"phase": "polling", "polls": 3, "token_acquisitions": 1},
                        "view": {
                            "kind": "track",
                            "title": "Bohemian Rhapsody",
                            "artists": "Queen",
                            "album_art_url": "https://i.scdn.co/image/abc",
                            "is_playing": True,
                        },
                    }
                }
            },
        },
    },
)
async def now_playing(poller: NowPlayingPoller = Depends(get_now_playing_poller)):
    snapshot = poller.snapshot()
    return {
        "snapshot": snapshot.model_dump(mode="json"),
        "view": render_now_playing(snapshot).model_dump(mode="json"),
        "running": poller.running,
    }


@router.post(
    "/api/spotify/now-playing/restart",
    summary="Restart the now-playing poller",
    description="""
    Clears the poller's token and state and starts polling again. This is the
    only way out of the error state. Answers 409 when the poller is disabled
    by configuration.

    **Rate Limited:** 5 requests/minute
    """,
    responses={409: {"model": ErrorResponse, "description": "Now-playing poller disabled"}},
)
@limiter.limit("5/minute")
async def restart_now_playing(
    request: Request,
    poller: NowPlayingPoller = Depends(get_now_playing_poller),
    settings: Settings = Depends(get_settings),
):
    if not settings.now_playing_enabled:
        raise ConfigurationException(
            "Now-playing poller is disabled",
            code=ErrorCode.NOW_PLAYING_DISABLED,
            status_code=409,
        )

    await poller.restart()
    return {"status": "restarted", "phase": poller.phase.value}
