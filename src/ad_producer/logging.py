"""Structured logging configuration."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from ad_producer.config import settings

HANDLER_NAME = "ad_producer"


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure structured logging for the application.

    Safe to call more than once; the previous ad_producer handler is replaced.
    """
    log_format = log_format or settings.log_format
    if log_format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
        exception_processors: list[Any] = [structlog.processors.dict_tracebacks]
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        exception_processors = []

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *exception_processors,
            renderer,
        ],
    )

    # Progress goes to stdout through rich; diagnostics stay on stderr
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel((level or settings.log_level).upper())

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@contextmanager
def production_context(production_id: str, **fields: Any) -> Iterator[None]:
    """Bind a production id (and any extra fields) to every log line in the block."""
    with structlog.contextvars.bound_contextvars(production_id=production_id, **fields):
        yield


@contextmanager
def phase_context(phase: str) -> Iterator[None]:
    with structlog.contextvars.bound_contextvars(phase=phase):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance for a module."""
    return structlog.get_logger(name)
