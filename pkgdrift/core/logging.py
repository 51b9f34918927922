"""Logging setup for the pkgdrift CLI — structlog events routed through stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

LEVEL_ENV = "PKGDRIFT_LOG_LEVEL"
FORMAT_ENV = "PKGDRIFT_LOG_FORMAT"

DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "console"


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=False)


def resolve_settings(level: str | None = None) -> tuple[str, str]:
    """Return ``(level, format)`` from *level* or the environment."""
    log_level = (level or os.environ.get(LEVEL_ENV) or DEFAULT_LEVEL).upper()
    log_format = (os.environ.get(FORMAT_ENV) or DEFAULT_FORMAT).lower()
    if log_format not in ("console", "json"):
        log_format = DEFAULT_FORMAT
    return log_level, log_format


def setup_logging(level: str | None = None) -> None:
    """Send pkgdrift's structlog events to stderr.

    ``PKGDRIFT_LOG_LEVEL`` (default WARNING) and ``PKGDRIFT_LOG_FORMAT``
    (``console`` or ``json``) are read from the environment; an explicit
    *level* overrides the former.  stdout is left to the report.
    """
    log_level, log_format = resolve_settings(level)
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                log_format: {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(log_format),
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": log_format,
                },
            },
            "loggers": {
                "pkgdrift": {
                    "handlers": ["stderr"],
                    "level": log_level,
                    "propagate": False,
                },
            },
        }
    )
