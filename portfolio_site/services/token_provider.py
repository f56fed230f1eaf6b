"""Spotify token provider.

Exchanges the configured refresh token for a short-lived access token. The
provider is stateless: every call makes exactly one request to the Spotify
accounts service and returns its JSON body unchanged.
"""

import base64
from typing import Any

import httpx

from portfolio_site.config import Settings, get_settings
from portfolio_site.exceptions import ConfigurationException, ErrorCode, NetworkFailureException, UpstreamException
from portfolio_site.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


def build_basic_auth_header(client_id: str, client_secret: str) -> str:
    """Build the HTTP Basic Authorization header value for the client credentials."""
    raw = f"{client_id}:{client_secret}".encode()
    return f"Basic {base64.b64encode(raw).decode('ascii')}"


def require_credentials(settings: Settings) -> tuple[str, str, str]:
    """Return (client_id, client_secret, refresh_token) or fail if any is missing.

    Raises:
        ConfigurationException: Naming the missing settings (never their values)
    """
    credentials = {
        "spotify_client_id": settings.spotify_client_id,
        "spotify_client_secret": settings.spotify_client_secret,
        "spotify_refresh_token": settings.spotify_refresh_token,
    }
    missing = [name for name, value in credentials.items() if not value]
    if missing:
        log_with_context(
            logger,
            "error",
            "Spotify credentials missing",
            missing=missing,
            event_type="spotify_config_missing",
        )
        raise ConfigurationException(
            "Missing Spotify credentials",
            code=ErrorCode.CONFIG_MISSING,
            details={"missing": missing},
        )
    return settings.spotify_client_id, settings.spotify_client_secret, settings.spotify_refresh_token


async def refresh_access_token(client: httpx.AsyncClient, settings: Settings | None = None) -> dict[str, Any]:
    """
    Exchange the refresh token for a new access token.

    Args:
        client: Shared HTTP client from dependency injection.
        settings: Settings instance (defaults to singleton)

    Returns:
        The token endpoint's JSON body, verbatim (access_token, token_type, expires_in, ...).

    Raises:
        ConfigurationException: If any credential is missing (no request is made).
        UpstreamException: If Spotify answers with a non-success status or an unreadable body.
        NetworkFailureException: If the request cannot be completed.
    """
    if settings is None:
        settings = get_settings()

    client_id, client_secret, refresh_token = require_credentials(settings)

    try:
        response = await client.post(
            settings.spotify_token_url,
            headers={
                "Authorization": build_basic_auth_header(client_id, client_secret),
                "Content-Type": "application/x-www-form-urlencoded",
            },
            data={"grant_type": "refresh_token", "refresh_token": refresh_token},
            timeout=10.0,
        )
    except httpx.HTTPError as e:
        log_with_context(
            logger,
            "error",
            "Spotify token request failed",
            error=str(e),
            error_type=type(e).__name__,
            event_type="spotify_token_network_error",
        )
        raise NetworkFailureException(details={"error_type": type(e).__name__}) from e

    if not response.is_success:
        log_with_context(
            logger,
            "error",
            "Spotify token refresh rejected",
            status_code=response.status_code,
            event_type="spotify_token_rejected",
        )
        raise UpstreamException(
            f"Failed to refresh token (HTTP {response.status_code})",
            details={"upstream_status": response.status_code},
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise UpstreamException("Invalid Spotify token response", details={"error_type": "parsing_error"}) from e

    log_with_context(
        logger,
        "info",
        "Spotify access token refreshed",
        expires_in=payload.get("expires_in") if isinstance(payload, dict) else None,
        event_type="spotify_token_refreshed",
    )
    return payload
