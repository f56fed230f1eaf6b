"""Pytest configuration and shared fixtures."""

import os

# Keep the app from polling real Spotify while tests run; must be set before
# the settings singleton is first created.
os.environ.setdefault("NOW_PLAYING_ENABLED", "false")
os.environ.setdefault("SPOTIFY_CLIENT_ID", "")
os.environ.setdefault("SPOTIFY_CLIENT_SECRET", "")
os.environ.setdefault("SPOTIFY_REFRESH_TOKEN", "")

from unittest.mock import AsyncMock  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from portfolio_site.cache import get_cache  # noqa: E402
from portfolio_site.config import Settings  # noqa: E402
from portfolio_site.core.middleware import limiter  # noqa: E402
from portfolio_site.main import app as fastapi_app  # noqa: E402


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Each test starts with fresh rate-limit counters."""
    limiter.reset()
    yield


@pytest_asyncio.fixture
async def clear_cache():
    await get_cache().clear()
    yield
    await get_cache().clear()


@pytest.fixture
def test_client():
    """FastAPI test client with lifespan context."""
    with TestClient(fastapi_app) as client:
        yield client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.post = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def mock_settings():
    """Settings instance with test values (does not read the environment's Spotify values)."""
    return Settings(
        api_host="0.0.0.0",
        api_port=8000,
        site_owner="Test Owner",
        spotify_client_id="test-spotify-client-id",
        spotify_client_secret="test-spotify-client-secret",
        spotify_refresh_token="test-refresh-token",
        now_playing_enabled=False,
        now_playing_poll_interval=30.0,
        github_username="octocat",
        github_api_url="https://api.github.com",
        github_cache_ttl=600,
        smtp_host="smtp.example.com",
        smtp_port=587,
        smtp_use_tls=True,
        smtp_username="site@example.com",
        smtp_password="app-password",
        contact_recipient="owner@example.com",
    )


@pytest.fixture
def spotify_track_payload():
    """Currently-playing response with one track."""
    return {
        "is_playing": True,
        "progress_ms": 60000,
        "item": {
            "name": "Bohemian Rhapsody",
            "artists": [{"name": "Queen"}, {"name": "David Bowie"}],
            "album": {
                "name": "A Night at the Opera",
                "images": [
                    {"url": "https://i.scdn.co/image/large.jpg", "width": 640},
                    {"url": "https://i.scdn.co/image/small.jpg", "width": 64},
                ],
            },
            "duration_ms": 354000,
        },
    }


@pytest.fixture
def github_repos_payload():
    """GitHub /users/{user}/repos response (trimmed)."""
    return [
        {
            "id": 1,
            "name": "portfolio",
            "description": "Personal site",
            "html_url": "https://github.com/octocat/portfolio",
            "stargazers_count": 5,
            "language": "Python",
            "homepage": "https://example.com",
            "fork": False,
        },
        {
            "id": 2,
            "name": "dotfiles",
            "description": None,
            "html_url": "https://github.com/octocat/dotfiles",
            "stargazers_count": 0,
            "language": None,
            "homepage": None,
        },
    ]
