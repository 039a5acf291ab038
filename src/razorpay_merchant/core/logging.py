"""
Logging for the Razorpay merchant SDK.

Everything logs under the ``razorpay_merchant`` logger. Order and payment ids
reach log messages straight from client request bodies, so the JSON format
encodes every record with a real JSON encoder, and the configured secrets are
redacted from every record before it is written.
"""

import json
import logging
import sys
from collections.abc import Iterable

# Default Logger Name
LOGGER_NAME = "razorpay_merchant"

REDACTED = "[REDACTED]"


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


class RedactSecretsFilter(logging.Filter):
    """Replace any configured secret found in a record's message or traceback."""

    def __init__(self, secrets: Iterable[str | None]) -> None:
        super().__init__()
        self._secrets = [s for s in secrets if s]

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True

        message = self._redact(record.getMessage())
        if record.exc_info:
            # Render the traceback now so it is scrubbed too
            trace = logging.Formatter().formatException(record.exc_info)
            message = f"{message}\n{self._redact(trace)}"
            record.exc_info = None
            record.exc_text = None

        record.msg = message
        record.args = None
        return True

    def _redact(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, REDACTED)
        return text


def configure_logging(
    level: int | str = logging.INFO,
    json_format: bool = False,
    secrets: Iterable[str | None] = (),
) -> logging.Logger:
    """
    Configure the razorpay_merchant logger.

    Args:
        level: Logging level (e.g., logging.INFO, "DEBUG")
        json_format: Whether to emit one JSON object per line
        secrets: Values that must never appear in the output

    Returns:
        The configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-configuring replaces the handler instead of stacking another one
    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if json_format:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    handler.addFilter(RedactSecretsFilter(secrets))
    logger.addHandler(handler)

    # Host applications keep their own root handlers
    logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a child logger of razorpay_merchant."""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)
