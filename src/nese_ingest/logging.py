"""Structured logging setup (structlog).

Log lines go to stderr so that ``nese-ingest extract --output -`` can write
clean JSON to stdout.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Iterator

import structlog


def _build_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
    ]


def configure_logging(level: str | None = None) -> None:
    from nese_ingest.config import settings

    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    structlog.configure(
        processors=_build_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


@contextmanager
def upload_context(filename: str, **extra) -> Iterator[None]:
    """Bind *filename* (and *extra*) to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(filename=filename, **extra):
        yield


# Safe default so module-level `log` works before configure_logging() runs.
structlog.configure(
    processors=_build_processors(),
    wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    cache_logger_on_first_use=False,  # re-evaluate after configure_logging()
)

log = structlog.get_logger()
