"""Spotify now-playing widget.

A NowPlayingPoller owns the whole widget lifecycle for one widget instance:
it acquires a bearer token from a TokenSource, polls the currently-playing
endpoint on a fixed interval, re-acquires the token on 401 and halts on any
other failure, or on a second 401 in a row. Each poll cycle reports a
PollResult; the poller applies it to its own state, and render_now_playing()
turns a snapshot into a view.
"""

import asyncio
import contextlib
import time
from collections.abc import Callable
from datetime import UTC, datetime

import httpx

from portfolio_site.config import SPOTIFY_CURRENTLY_PLAYING_URL, Settings, get_settings
from portfolio_site.exceptions import ErrorCode, PortfolioException, UpstreamException
from portfolio_site.logging_config import get_logger, log_with_context
from portfolio_site.models.now_playing import (
    NowPlayingSnapshot,
    NowPlayingView,
    PlaybackStatus,
    PollOutcome,
    PollResult,
    TokenPayload,
    WidgetPhase,
)
from portfolio_site.protocols import TokenSource
from portfolio_site.services import token_provider
from portfolio_site.state_managers import StateManager

logger = get_logger(__name__)

POLL_INTERVAL_SECONDS = 30.0

TOKEN_FAILED_MESSAGE = "Failed to connect to Spotify"
FETCH_FAILED_MESSAGE = "Failed to fetch current track"
NETWORK_FAILED_MESSAGE = "Unable to reach Spotify"
NOT_PLAYING_MESSAGE = "Not playing right now"


async def fetch_currently_playing(
    client: httpx.AsyncClient,
    access_token: str,
    url: str = SPOTIFY_CURRENTLY_PLAYING_URL,
) -> PollResult:
    """
    Run one poll against the currently-playing endpoint.

    HTTP outcomes are reported through the returned PollResult, never raised.

    Args:
        client: Shared HTTP client.
        access_token: Bearer token to present.
        url: Currently-playing endpoint.

    Returns:
        PollResult describing the outcome.
    """
    try:
        response = await client.get(url, headers={"Authorization": f"Bearer {access_token}"})
    except httpx.HTTPError as e:
        log_with_context(
            logger,
            "warning",
            "Currently-playing request failed",
            error=str(e),
            error_type=type(e).__name__,
            event_type="now_playing_network_error",
        )
        return PollResult(
            outcome=PollOutcome.FATAL_ERROR,
            message=NETWORK_FAILED_MESSAGE,
            error_code=ErrorCode.NETWORK_ERROR,
        )

    if response.status_code == 204:
        return PollResult(outcome=PollOutcome.IDLE, status=PlaybackStatus.idle(), upstream_status=204)

    if response.status_code == 401:
        return PollResult(
            outcome=PollOutcome.AUTH_ERROR,
            error_code=ErrorCode.SPOTIFY_AUTH_ERROR,
            upstream_status=401,
        )

    if not response.is_success:
        log_with_context(
            logger,
            "warning",
            "Currently-playing request rejected",
            status_code=response.status_code,
            event_type="now_playing_upstream_error",
        )
        return PollResult(
            outcome=PollOutcome.FATAL_ERROR,
            message=FETCH_FAILED_MESSAGE,
            error_code=ErrorCode.UPSTREAM_UNAVAILABLE,
            upstream_status=response.status_code,
        )

    # Spotify occasionally answers 200 with an empty body when nothing plays
    if not response.content:
        return PollResult(outcome=PollOutcome.IDLE, status=PlaybackStatus.idle(), upstream_status=response.status_code)

    try:
        data = response.json()
        status = PlaybackStatus.from_spotify(data)
    except (ValueError, AttributeError, TypeError) as e:
        log_with_context(
            logger,
            "warning",
            "Unreadable currently-playing response",
            error=str(e),
            event_type="now_playing_parse_error",
        )
        return PollResult(
            outcome=PollOutcome.FATAL_ERROR,
            message=FETCH_FAILED_MESSAGE,
            error_code=ErrorCode.UPSTREAM_UNAVAILABLE,
            upstream_status=response.status_code,
        )

    return PollResult(outcome=PollOutcome.SUCCESS, status=status, upstream_status=response.status_code)


class ProviderTokenSource:
    """Token source that calls the token provider in-process."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings | None = None):
        self._client = client
        self._settings = settings

    async def fetch_token(self) -> str:
        payload = await token_provider.refresh_access_token(self._client, self._settings or get_settings())
        return _parse_token_payload(payload)


class EndpointTokenSource:
    """Token source that POSTs to a token provider endpoint (e.g. /api/spotify-token)."""

    def __init__(self, client: httpx.AsyncClient, url: str):
        self._client = client
        self._url = url

    async def fetch_token(self) -> str:
        response = await self._client.post(self._url, timeout=10.0)
        if not response.is_success:
            raise UpstreamException(
                "Failed to get access token",
                details={"upstream_status": response.status_code},
            )
        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamException("Invalid token endpoint response") from e
        return _parse_token_payload(payload)


def _parse_token_payload(payload) -> str:
    try:
        return TokenPayload.model_validate(payload).access_token
    except ValueError as e:
        raise UpstreamException("Token response has no access_token") from e


def build_token_source(client: httpx.AsyncClient, settings: Settings) -> TokenSource:
    """Pick the token source for the configured deployment."""
    if settings.now_playing_token_endpoint:
        return EndpointTokenSource(client, settings.now_playing_token_endpoint)
    return ProviderTokenSource(client, settings)


class NowPlayingPoller(StateManager):
    """Polls Spotify for one now-playing widget.

    All widget state (token, status, phase) is instance state; the polling
    loop is a single task, so at most one request is in flight at a time.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token_source: TokenSource,
        interval: float = POLL_INTERVAL_SECONDS,
        url: str = SPOTIFY_CURRENTLY_PLAYING_URL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._client = client
        self._token_source = token_source
        self.interval = interval
        self._url = url
        self._clock = clock

        self._task: asyncio.Task | None = None
        self._reset()

    def _reset(self) -> None:
        self._access_token: str | None = None
        self._phase = WidgetPhase.UNINITIALIZED
        self._status: PlaybackStatus | None = None
        self._error: str | None = None
        self._polls = 0
        self._token_acquisitions = 0
        self._last_polled_at: datetime | None = None

    @property
    def phase(self) -> WidgetPhase:
        return self._phase

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def snapshot(self) -> NowPlayingSnapshot:
        return NowPlayingSnapshot(
            phase=self._phase,
            status=self._status,
            error=self._error,
            polls=self._polls,
            token_acquisitions=self._token_acquisitions,
            last_polled_at=self._last_polled_at,
        )

    # Lifecycle

    async def initialize(self) -> None:
        self.start()

    async def cleanup(self) -> None:
        await self.stop()

    def start(self) -> asyncio.Task:
        """Start the polling task if it is not already running."""
        if not self.running:
            self._task = asyncio.create_task(self.run(), name="now-playing-poller")
        return self._task

    async def stop(self) -> None:
        """Cancel the polling task and drop the token."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._access_token = None

    async def restart(self) -> asyncio.Task:
        """Throw away all state (including a halted error state) and start over."""
        await self.stop()
        self._reset()
        log_with_context(logger, "info", "Now-playing poller restarted", event_type="now_playing_restart")
        return self.start()

    # State machine

    async def run(self) -> None:
        """Acquire a token, then poll until an unrecoverable failure or cancellation."""
        try:
            if not await self.acquire_token():
                return

            reacquired = False
            while True:
                tick_started = self._clock()
                result = await self.poll_once()

                if result.outcome is PollOutcome.AUTH_ERROR:
                    if reacquired:
                        # The replacement token was rejected too
                        self._enter_error(TOKEN_FAILED_MESSAGE, ErrorCode.SPOTIFY_AUTH_ERROR)
                        return
                    if not await self.acquire_token():
                        return
                    # New token, new cycle: poll again right away
                    reacquired = True
                    continue

                reacquired = False

                if result.outcome is PollOutcome.FATAL_ERROR:
                    return

                await self._sleep_until_next_tick(tick_started)
        finally:
            self._access_token = None

    async def poll_once(self) -> PollResult:
        """Run a single poll cycle with the held token and apply its result."""
        if self._access_token is None:
            return PollResult(outcome=PollOutcome.AUTH_ERROR, error_code=ErrorCode.SPOTIFY_AUTH_ERROR)

        result = await fetch_currently_playing(self._client, self._access_token, self._url)
        self._polls += 1
        self._last_polled_at = datetime.now(UTC)
        self._apply(result)
        return result

    def _apply(self, result: PollResult) -> None:
        if result.outcome is PollOutcome.SUCCESS:
            self._status = result.status
            self._phase = WidgetPhase.POLLING
        elif result.outcome is PollOutcome.IDLE:
            self._status = PlaybackStatus.idle()
            self._phase = WidgetPhase.IDLE
        elif result.outcome is PollOutcome.AUTH_ERROR:
            # A rejected token is never presented again
            self._access_token = None
            log_with_context(
                logger,
                "info",
                "Spotify rejected access token, re-acquiring",
                event_type="now_playing_token_rejected",
            )
        else:
            self._enter_error(result.message or FETCH_FAILED_MESSAGE, result.error_code)

    async def acquire_token(self) -> bool:
        self._phase = WidgetPhase.ACQUIRING
        try:
            token = await self._token_source.fetch_token()
        except (PortfolioException, httpx.HTTPError) as e:
            log_with_context(
                logger,
                "error",
                "Could not acquire Spotify access token",
                error=str(e),
                error_type=type(e).__name__,
                event_type="now_playing_token_error",
            )
            self._enter_error(TOKEN_FAILED_MESSAGE, getattr(e, "code", ErrorCode.NETWORK_ERROR))
            return False

        self._access_token = token
        self._token_acquisitions += 1
        self._phase = WidgetPhase.POLLING
        log_with_context(
            logger,
            "debug",
            "Spotify access token acquired",
            acquisitions=self._token_acquisitions,
            event_type="now_playing_token_acquired",
        )
        return True

    def _enter_error(self, message: str, code: ErrorCode | None) -> None:
        self._phase = WidgetPhase.ERROR
        self._error = message
        log_with_context(
            logger,
            "warning",
            "Now-playing poller halted",
            error_message=message,
            error_code=code.value if code else None,
            event_type="now_playing_halted",
        )

    async def _sleep_until_next_tick(self, tick_started: float) -> None:
        """Sleep until the next tick of the fixed interval grid.

        Ticks missed while a slow request was in flight are skipped, not replayed.
        """
        elapsed = self._clock() - tick_started
        if elapsed >= self.interval:
            log_with_context(
                logger,
                "warning",
                "Poll overran interval, skipping ticks",
                elapsed_seconds=round(elapsed, 3),
                skipped_ticks=int(elapsed // self.interval),
                event_type="now_playing_tick_skipped",
            )
        await asyncio.sleep(self.interval - (elapsed % self.interval))


def render_now_playing(snapshot: NowPlayingSnapshot) -> NowPlayingView:
    """Turn a poller snapshot into what the widget shows. Pure function."""
    if snapshot.phase is WidgetPhase.ERROR:
        return NowPlayingView(kind="error", message=snapshot.error or FETCH_FAILED_MESSAGE)

    track = snapshot.status.track if snapshot.status else None
    if track is None:
        return NowPlayingView(kind="idle", message=NOT_PLAYING_MESSAGE)

    return NowPlayingView(
        kind="track",
        title=track.title,
        artists=track.artist_line,
        album_name=track.album_name,
        album_art_url=track.album_art_url,
        is_playing=snapshot.status.is_playing,
    )
