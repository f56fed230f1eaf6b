"""Redaction helpers for logged URLs and headers."""

import re

# Query/form parameters whose values never reach the logs
SENSITIVE_PARAMS = [
    "token",
    "password",
    "secret",
    "key",
    "code",
    "refresh_token",
    "access_token",
    "client_secret",
    "authorization",
]

_PARAM_PATTERN = re.compile(
    rf"(?P<name>{'|'.join(re.escape(p) for p in SENSITIVE_PARAMS)})=(?P<value>[^&\s\"]+)",
    re.IGNORECASE,
)


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameters from a URL."""
    return _PARAM_PATTERN.sub(lambda m: f"{m.group('name')}=***REDACTED***", url)


def redact_authorization(value: str | None) -> str | None:
    """Keep only the scheme of an Authorization header ("Bearer ***")."""
    if not value:
        return value
    scheme, _, _ = value.partition(" ")
    return f"{scheme} ***"
