"""Logging helpers for english_optimizer."""

from __future__ import annotations

from datetime import UTC, datetime
import json
import logging
from pathlib import Path

PACKAGE_LOGGER = "english_optimizer"


def configure_logging(level: str = "WARNING", log_file: str | None = None) -> logging.Logger:
    """Configure and return the package logger. Safe to call more than once."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    resolved = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(resolved)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(resolved)
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Console handler (stderr, text)
    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    ch.setLevel(resolved)
    logger.addHandler(ch)

    # File handler (JSONL)
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(JSONFormatter())
        fh.setLevel(resolved)
        logger.addHandler(fh)

    logger.propagate = False
    return logger


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "path": record.pathname,
            "line": record.lineno,
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry)
