"""Protocol definitions for dependency injection."""

from typing import Protocol


class TokenSource(Protocol):
    """Something that can hand the now-playing poller a fresh bearer token.

    Implementations raise a PortfolioException (or an httpx error) when no
    token can be obtained.
    """

    async def fetch_token(self) -> str:
        """Acquire a new Spotify access token.

        Returns:
            Bearer token string
        """
        ...
