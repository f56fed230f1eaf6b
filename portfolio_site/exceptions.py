"""Custom exceptions for the portfolio site with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    PORTFOLIO_ERROR = "PORTFOLIO_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Spotify / upstream errors
    SPOTIFY_ERROR = "SPOTIFY_ERROR"
    SPOTIFY_AUTH_ERROR = "SPOTIFY_AUTH_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    NETWORK_ERROR = "NETWORK_ERROR"
    NOW_PLAYING_DISABLED = "NOW_PLAYING_DISABLED"

    # GitHub errors
    GITHUB_ERROR = "GITHUB_ERROR"
    GITHUB_API_ERROR = "GITHUB_API_ERROR"

    # Contact form errors
    CONTACT_ERROR = "CONTACT_ERROR"
    EMAIL_DELIVERY_ERROR = "EMAIL_DELIVERY_ERROR"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"


class PortfolioException(Exception):
    """Base exception for site errors with HTTP status code support.

    All custom exceptions inherit from this class so a single handler can
    render them consistently.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.PORTFOLIO_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize portfolio exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ConfigurationException(PortfolioException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class SpotifyException(PortfolioException):
    """Spotify-related errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SPOTIFY_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class UpstreamException(SpotifyException):
    """The Spotify token endpoint answered with a non-success status or bad body."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.UPSTREAM_ERROR,
            status_code=500,
            details=details,
        )


class NetworkFailureException(SpotifyException):
    """Transport-level failure talking to Spotify."""

    def __init__(self, message: str = "Unable to reach Spotify", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.NETWORK_ERROR,
            status_code=500,
            details=details,
        )


class GitHubException(PortfolioException):
    """GitHub project listing errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.GITHUB_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class GitHubAPIException(GitHubException):
    """GitHub API request failed."""

    def __init__(self, message: str, status_code: int = 502, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.GITHUB_API_ERROR,
            status_code=status_code,
            details=details,
        )


class ContactException(PortfolioException):
    """Contact form errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONTACT_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class EmailDeliveryException(ContactException):
    """SMTP delivery failed."""

    def __init__(self, message: str = "Email could not be sent", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.EMAIL_DELIVERY_ERROR,
            status_code=500,
            details=details,
        )
