"""Tests for dependency injection functions."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from portfolio_site.dependencies import get_comment_store, get_http_client, get_now_playing_poller
from portfolio_site.services.now_playing import NowPlayingPoller
from portfolio_site.state_managers import CommentStore


class TestDependencies:
    """Tests for dependency injection functions."""

    @pytest.mark.asyncio
    async def test_get_http_client(self):
        """Test getting HTTP client from app state."""
        mock_request = MagicMock()
        mock_client = AsyncMock(spec=AsyncClient)
        mock_request.app.state.http_client = mock_client

        client = await get_http_client(mock_request)

        assert client == mock_client

    @pytest.mark.asyncio
    async def test_get_now_playing_poller(self):
        """Test getting the now-playing poller from app state."""
        mock_request = MagicMock()
        mock_poller = MagicMock(spec=NowPlayingPoller)
        mock_request.app.state.now_playing_poller = mock_poller

        poller = await get_now_playing_poller(mock_request)

        assert poller == mock_poller

    @pytest.mark.asyncio
    async def test_get_comment_store(self):
        """Test getting the comment store from app state."""
        mock_request = MagicMock()
        store = CommentStore()
        mock_request.app.state.comment_store = store

        assert await get_comment_store(mock_request) is store

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "dependency,message",
        [
            (get_http_client, "HTTP client not initialized"),
            (get_now_playing_poller, "Now-playing poller not initialized"),
            (get_comment_store, "Comment store not initialized"),
        ],
    )
    async def test_missing_state_raises(self, dependency, message):
        """Dependencies fail loudly when the lifespan has not run."""
        mock_request = MagicMock()
        mock_request.app.state = SimpleNamespace()

        with pytest.raises(RuntimeError, match=message):
            await dependency(mock_request)
