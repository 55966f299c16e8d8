"""Logging configuration for the Engagement domain.

Engagement runs inside the commerce host's process, so the root logger
and structlog's global configuration belong to the host. Nothing here
runs at import time. Hosts that want engagement's own output call
configure_logging() once at startup; its handlers hang off the
``engagement`` logger and never touch the root logger.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LOGGER_NAME = "engagement"


def get_log_level() -> str:
    """Get log level based on environment."""
    env = (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()

    level_map = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }

    return os.getenv("LOG_LEVEL", level_map.get(env, "INFO"))


def _rotating_handler(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: str | Path | None = None, log_file_prefix: str = "engagement") -> logging.Logger:
    """Attach console (and, with ``log_dir``, rotating file) handlers to the ``engagement`` logger.

    Records stop propagating to the host's root handlers once engagement
    has handlers of its own, so they are not written twice.
    """
    log_level = get_log_level()

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(log_level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    package_logger.addHandler(console_handler)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        package_logger.addHandler(_rotating_handler(log_path / f"{log_file_prefix}.log", log_level))
        package_logger.addHandler(_rotating_handler(log_path / f"{log_file_prefix}_error.log", logging.ERROR))

    package_logger.propagate = False
    return package_logger


def setup_structlog() -> None:
    """Configure structlog for structured logging.

    structlog keeps a single process-wide configuration: call this only
    when the host has not configured structlog itself.
    """
    env = os.getenv("ENVIRONMENT", "development").lower()

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.contextvars.merge_contextvars,
    ]

    if env in ["production", "staging"]:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(
    log_dir: str | Path | None = None,
    log_file_prefix: str = "engagement",
    configure_structlog: bool = True,
) -> logging.Logger:
    """Set up engagement's logging. Meant to be called once by the host at startup.

    Args:
        log_dir: directory for rotating log files; no files are written when omitted
        configure_structlog: pass False when the host already configures structlog
    """
    package_logger = setup_stdlib_logging(log_dir=log_dir, log_file_prefix=log_file_prefix)
    if configure_structlog:
        setup_structlog()
    return package_logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


def bind_event_context(**kwargs: Any) -> None:
    """Bind context (event name, entity id) to every log line of the current handler run."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_event_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()
