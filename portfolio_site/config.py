from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent  # portfolio-site/

SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_CURRENTLY_PLAYING_URL = "https://api.spotify.com/v1/me/player/currently-playing"
GITHUB_API_URL = "https://api.github.com"


class Settings(BaseSettings):
    """Application settings loaded from the environment or a .env file.

    The Spotify credentials default to empty. Pages are served without them;
    the token endpoint reports the missing values per request.
    """

    # Server
    api_host: str = Field(default="127.0.0.1", min_length=1, description="Server host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="Server port")
    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: Path | None = Field(default=None, description="Directory for the JSON log file (defaults to ./logs)")
    cors_origins: str = Field(
        default="http://localhost:8000,http://127.0.0.1:8000",
        description="Comma-separated list of allowed CORS origins",
    )
    trusted_hosts: str = Field(
        default="localhost,127.0.0.1,testserver",
        description="Comma-separated list of accepted Host headers",
    )

    # Site identity
    site_owner: str = Field(default="Portfolio Owner", min_length=1, description="Name shown on the home page")
    site_tagline: str = Field(default="Software developer", description="Short introduction line")

    # Spotify credential set (server side only)
    spotify_client_id: str = Field(default="", description="Spotify OAuth client ID")
    spotify_client_secret: str = Field(default="", description="Spotify OAuth client secret")
    spotify_refresh_token: str = Field(default="", description="Long-lived Spotify refresh token")
    spotify_token_url: str = Field(default=SPOTIFY_TOKEN_URL, pattern=r"^https?://")
    spotify_currently_playing_url: str = Field(default=SPOTIFY_CURRENTLY_PLAYING_URL, pattern=r"^https?://")

    # Now-playing widget
    now_playing_enabled: bool = Field(default=True, description="Start the now-playing poller on startup")
    now_playing_poll_interval: float = Field(default=30.0, gt=0, description="Seconds between polls")
    now_playing_token_endpoint: str = Field(
        default="",
        description="Token endpoint URL for the poller; empty means call the token provider in-process",
    )

    # GitHub projects
    github_username: str = Field(default="", description="GitHub user whose public repos are listed")
    github_api_url: str = Field(default=GITHUB_API_URL, pattern=r"^https?://")
    github_cache_ttl: int = Field(default=600, ge=0, description="Seconds to cache the repo list")

    # Contact form email
    smtp_host: str = Field(default="smtp.gmail.com", min_length=1)
    smtp_port: int = Field(default=587, ge=1, le=65535)
    smtp_username: str = Field(default="", description="SMTP login, also used as sender address")
    smtp_password: str = Field(default="", description="SMTP password or app password")
    smtp_use_tls: bool = Field(default=True, description="Upgrade the SMTP connection with STARTTLS")
    contact_recipient: str = Field(default="", description="Address that receives contact messages")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("spotify_client_id", "spotify_client_secret", "spotify_refresh_token", mode="after")
    @classmethod
    def strip_credentials(cls, v: str) -> str:
        """Treat whitespace-only credentials as absent."""
        return v.strip()

    @field_validator("now_playing_token_endpoint", mode="after")
    @classmethod
    def validate_token_endpoint(cls, v: str) -> str:
        """Ensure the optional token endpoint is an http(s) URL."""
        v = v.strip()
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("now_playing_token_endpoint must be a valid http:// or https:// URL")
        return v

    @field_validator("github_username", mode="after")
    @classmethod
    def validate_github_username(cls, v: str) -> str:
        """Strip a leading @ and surrounding whitespace."""
        return v.strip().lstrip("@")

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v

    @property
    def spotify_configured(self) -> bool:
        """True when the full Spotify credential set is present."""
        return bool(self.spotify_client_id and self.spotify_client_secret and self.spotify_refresh_token)


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Returns:
        Cached Settings instance

    Example:
        @router.get("/")
        async def route(settings: Settings = Depends(get_settings)):
            return {"owner": settings.site_owner}
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
