"""Logging setup for Trackboard.

All modules log through ``logging.getLogger(__name__)`` below the ``trackboard``
logger; ``setup_logging`` attaches a rotating file handler (and optionally the
console) to that logger once, at process start.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "trackboard.log"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_EXCERPT_LENGTH = 500

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Credentials users tend to paste along with an import document
_REDACTIONS = (
    (re.compile(r"eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+"), "[JWT]"),
    (re.compile(r"Bearer [a-zA-Z0-9._-]+"), "Bearer [REDACTED]"),
    (re.compile(r"(apikey|token)=[a-zA-Z0-9._-]+"), r"\1=[REDACTED]"),
)
_WHITESPACE = re.compile(r"\s+")


def setup_logging(
    log_dir: str | Path | None = None,
    level: str | None = None,
    console: bool = True,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> logging.Logger:
    """Attach rotating file (and console) handlers to the ``trackboard`` logger.

    Calling it again replaces the handlers instead of stacking them.

    Args:
        log_dir: Directory for log files, created if missing. Falls back to
            TRACKBOARD_LOG_DIR, then 'logs'.
        level: DEBUG, INFO, WARNING or ERROR. Falls back to
            TRACKBOARD_LOG_LEVEL, then INFO. Unknown names mean INFO.
        console: Also log to stderr.
        log_file: File name inside log_dir.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files to keep.

    Returns:
        The ``trackboard`` logger.
    """
    log_dir = Path(log_dir or os.environ.get("TRACKBOARD_LOG_DIR", DEFAULT_LOG_DIR))
    log_dir.mkdir(parents=True, exist_ok=True)

    level = level or os.environ.get("TRACKBOARD_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("trackboard")
    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    log_path = log_dir / log_file
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("Trackboard logging initialized (level=%s, file=%s)", level, log_path)
    return logger


def redact(text: str) -> str:
    """Replace API keys and bearer tokens in text with placeholders."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


def import_excerpt(raw_text: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Single-line, redacted, length-capped view of a pasted import document."""
    excerpt = _WHITESPACE.sub(" ", redact(raw_text)).strip()
    if len(excerpt) <= max_length:
        return excerpt
    return f"{excerpt[:max_length]}... [{len(excerpt) - max_length} more chars]"
