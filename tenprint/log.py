"""structlog setup."""

import logging
import sys

import structlog

from tenprint.config.models import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        config: Logging configuration (level, json/text format, output stream).
    """
    level = getattr(logging, config.level)
    stream = sys.stdout if config.output == "stdout" else sys.stderr

    # uvicorn logs through the standard library
    logging.basicConfig(format="%(message)s", stream=stream, level=level, force=True)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if config.format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )
