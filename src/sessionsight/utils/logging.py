"""Logging setup for sessionsight.

Attaches a console handler and an optional file handler to the
``sessionsight`` package logger. Safe to call repeatedly, e.g. after the
settings are reloaded.
"""

from __future__ import annotations

import logging
import sys

from sessionsight.config.settings import LoggingConfig

PACKAGE_LOGGER = "sessionsight"

_HANDLER_PREFIX = f"{PACKAGE_LOGGER}."


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Configure the package logger from a LoggingConfig.

    Handlers installed by an earlier call are closed and replaced, so
    records are never emitted twice. Handlers added by the host
    application are left alone.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).

    Returns:
        The configured package logger.
    """
    if config is None:
        config = LoggingConfig()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_own_handlers(package_logger)
    package_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))

    for handler in handlers:
        kind = "file" if isinstance(handler, logging.FileHandler) else "console"
        handler.set_name(f"{_HANDLER_PREFIX}{kind}")
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.info("Logging initialized at %s level", config.level)
    return package_logger


def _remove_own_handlers(package_logger: logging.Logger) -> None:
    for handler in list(package_logger.handlers):
        if (handler.get_name() or "").startswith(_HANDLER_PREFIX):
            package_logger.removeHandler(handler)
            handler.close()
