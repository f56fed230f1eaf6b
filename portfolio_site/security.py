"""Host and origin allow-lists for the HTTP middleware."""

from portfolio_site.config import Settings


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def get_cors_origins(settings: Settings) -> list[str]:
    """Allowed CORS origins from settings."""
    return _split_csv(settings.cors_origins)


def get_trusted_hosts(settings: Settings) -> list[str]:
    """Trusted Host header patterns from settings."""
    return _split_csv(settings.trusted_hosts) or ["*"]
