"""Structured logging configuration for the portfolio site.

Every record passes through CredentialFilter before any handler formats it,
so Spotify bearer tokens, Basic credentials and token fields never reach
logs/portfolio.log (JSON, rotated at 10MB with 5 backups) or stdout.
"""

import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_FILE_NAME = "portfolio.log"

JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s %(filename)s %(lineno)d"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

REDACTED = "***"
SECRET_FIELDS = frozenset({"access_token", "refresh_token", "client_secret", "password", "smtp_password"})
_CREDENTIAL_PATTERN = re.compile(r"\b(?P<scheme>Bearer|Basic)\s+[A-Za-z0-9._~+/=-]+")

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def scrub_credentials(text: str) -> str:
    """Replace the credential after a Bearer/Basic scheme with ***."""
    return _CREDENTIAL_PATTERN.sub(lambda m: f"{m.group('scheme')} {REDACTED}", text)


class CredentialFilter(logging.Filter):
    """Masks secrets in the message and in structured extra fields."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = scrub_credentials(record.msg)

        for key, value in list(record.__dict__.items()):
            if key in _RECORD_ATTRS:
                continue
            if key in SECRET_FIELDS and value:
                setattr(record, key, REDACTED)
            elif isinstance(value, str):
                setattr(record, key, scrub_credentials(value))
        return True


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> logging.Logger:
    """Configure JSON file logging and console logging on the root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for portfolio.log (defaults to ./logs next to the package)

    Returns:
        The root logger
    """
    log_dir = log_dir or DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    credential_filter = CredentialFilter()

    file_handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT, timestamp=True))
    file_handler.setLevel(logging.DEBUG)
    file_handler.addFilter(credential_filter)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    console_handler.setLevel(level)
    console_handler.addFilter(credential_filter)
    root_logger.addHandler(console_handler)

    # Outbound requests are logged by our own event hooks, with redaction
    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log `message` at `level` with `extra_fields` as structured JSON keys.

    `event_type` is the conventional key for grouping records, e.g.
    `now_playing_halted` or `spotify_token_refreshed`.
    """
    getattr(logger, level.lower())(message, extra=extra_fields)
