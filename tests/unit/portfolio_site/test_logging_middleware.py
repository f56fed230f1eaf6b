"""Tests for log redaction helpers."""

import pytest

from portfolio_site.middleware.logging_middleware import redact_authorization, redact_sensitive_data


@pytest.mark.parametrize(
    "url,leaked",
    [
        ("https://accounts.spotify.com/api/token?refresh_token=abc123", "abc123"),
        ("https://example.com/cb?code=xyz&state=1", "xyz"),
        ("https://example.com/?client_secret=s3cr3t&page=2", "s3cr3t"),
    ],
)
def test_redact_sensitive_data(url, leaked):
    redacted = redact_sensitive_data(url)

    assert leaked not in redacted
    assert "***REDACTED***" in redacted


def test_redact_keeps_harmless_params():
    assert redact_sensitive_data("https://api.github.com/users/octocat/repos?page=2") == (
        "https://api.github.com/users/octocat/repos?page=2"
    )


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Bearer BQD-secret-token", "Bearer ***"),
        ("Basic Y2xpZW50OnNlY3JldA==", "Basic ***"),
        (None, None),
        ("", ""),
    ],
)
def test_redact_authorization(value, expected):
    assert redact_authorization(value) == expected
