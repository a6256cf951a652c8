"""Logging setup for the bot process."""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that log every HTTP request, including each long poll
NOISY_LOGGERS = ("urllib3", "requests")


def resolve_level(name: str) -> int:
    """Translate a level name such as ``debug`` into its numeric value.

    :param name: Standard logging level name, case-insensitive.
    :returns: Numeric logging level.
    :raises ValueError: If the name is not a standard logging level.
    """
    level = logging.getLevelNamesMapping().get(name.strip().upper())
    if level is None:
        raise ValueError(f"Invalid log level: {name}")
    return level


def configure_logging(level_name: str | None = None) -> None:
    """Send every log record to stdout through a single handler.

    Env vars:
      - LOG_LEVEL: DEBUG/INFO/WARNING/ERROR/CRITICAL (default INFO)
      - LOG_HTTP: true to keep request-level logs from the HTTP stack (default false)

    :param level_name: Overrides LOG_LEVEL when given.
    :raises ValueError: If the level name is invalid.
    """
    level = resolve_level(level_name or os.environ.get("LOG_LEVEL", "INFO"))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    http_logs = os.environ.get("LOG_HTTP", "false").strip().lower() == "true"
    http_level = level if http_logs else max(level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(http_level)

    logging.getLogger(__name__).info(
        f"Logging configured: level={logging.getLevelName(level)}, http_logs={http_logs}"
    )
