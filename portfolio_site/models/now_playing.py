"""Models for the Spotify now-playing widget."""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from portfolio_site.exceptions import ErrorCode


class Track(BaseModel):
    """A track as shown by the widget."""

    title: str
    artists: list[str] = Field(default_factory=list, description="Artist names in upstream order")
    album_name: str | None = None
    album_art_url: str | None = None
    duration_ms: int | None = None

    @classmethod
    def from_spotify_item(cls, item: dict[str, Any]) -> "Track":
        """Build a Track from the `item` object of a currently-playing response."""
        album = item.get("album") or {}
        images = album.get("images") or []
        return cls(
            title=item.get("name") or "",
            artists=[artist.get("name", "") for artist in item.get("artists") or []],
            album_name=album.get("name"),
            album_art_url=images[0].get("url") if images else None,
            duration_ms=item.get("duration_ms"),
        )

    @property
    def artist_line(self) -> str:
        return ", ".join(self.artists)


class PlaybackStatus(BaseModel):
    """Playback status derived from one upstream poll."""

    is_playing: bool = False
    track: Track | None = None

    @classmethod
    def idle(cls) -> "PlaybackStatus":
        return cls(is_playing=False, track=None)

    @classmethod
    def from_spotify(cls, data: dict[str, Any]) -> "PlaybackStatus":
        item = data.get("item")
        return cls(
            is_playing=bool(data.get("is_playing", False)),
            track=Track.from_spotify_item(item) if item else None,
        )


class TokenPayload(BaseModel):
    """Token endpoint response. Extra upstream fields are kept as-is."""

    model_config = ConfigDict(extra="allow")

    access_token: str = Field(min_length=1)
    token_type: str = "Bearer"
    expires_in: int | None = None


class WidgetPhase(str, Enum):
    """Lifecycle phases of a now-playing poller."""

    UNINITIALIZED = "uninitialized"
    ACQUIRING = "acquiring"
    POLLING = "polling"
    IDLE = "idle"
    ERROR = "error"


class PollOutcome(str, Enum):
    """Result kinds of a single poll cycle."""

    SUCCESS = "success"
    IDLE = "idle"
    AUTH_ERROR = "auth_error"
    FATAL_ERROR = "fatal_error"


class PollResult(BaseModel):
    """What one poll cycle observed."""

    outcome: PollOutcome
    status: PlaybackStatus | None = None
    message: str | None = None
    error_code: ErrorCode | None = None
    upstream_status: int | None = None


class NowPlayingSnapshot(BaseModel):
    """Read-only copy of a poller's state."""

    phase: WidgetPhase
    status: PlaybackStatus | None = None
    error: str | None = None
    polls: int = 0
    token_acquisitions: int = 0
    last_polled_at: datetime | None = None


class NowPlayingView(BaseModel):
    """Everything the widget template needs, derived from a snapshot."""

    kind: Literal["error", "idle", "track"]
    message: str | None = None
    title: str | None = None
    artists: str | None = None
    album_name: str | None = None
    album_art_url: str | None = None
    is_playing: bool = False
