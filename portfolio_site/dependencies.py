"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Request

from portfolio_site.services.now_playing import NowPlayingPoller
from portfolio_site.state_managers import CommentStore


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Raises:
        RuntimeError: If HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. This should never happen.")

    return client


async def get_now_playing_poller(request: Request) -> NowPlayingPoller:
    """
    Get the now-playing poller from app state.

    Raises:
        RuntimeError: If the poller is not initialized.
    """
    poller: NowPlayingPoller | None = getattr(request.app.state, "now_playing_poller", None)

    if poller is None:
        raise RuntimeError("Now-playing poller not initialized.")

    return poller


async def get_comment_store(request: Request) -> CommentStore:
    """
    Get the comment store from app state.

    Raises:
        RuntimeError: If the comment store is not initialized.
    """
    store: CommentStore | None = getattr(request.app.state, "comment_store", None)

    if store is None:
        raise RuntimeError("Comment store not initialized.")

    return store
