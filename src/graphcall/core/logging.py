"""Structured logging configuration for graphcall.

Uses structlog for JSON-formatted logs to stderr. Loggers route through the
stdlib logging module, so a host that never configures logging only sees
WARNING and above (on stderr, via logging.lastResort). Each executor invocation
binds a request ID via contextvars so that every event emitted while walking
pages and retrying can be traced back to one logical call.

Usage:
    from graphcall.core.logging import get_logger, bind_request_id

    logger = get_logger(__name__)

    with bind_request_id():
        logger.info("request_start", method="GET", url=url)
"""

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

import structlog


@contextmanager
def bind_request_id(request_id: str | None = None) -> Iterator[str]:
    """Bind a request ID to all log entries emitted inside the block.

    Args:
        request_id: ID to bind, or None to generate a fresh UUID

    Yields:
        The bound request ID
    """
    request_id = request_id or uuid.uuid4().hex
    with structlog.contextvars.bound_contextvars(request_id=request_id):
        yield request_id


def configure_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_output: If True, output JSON; if False, output human-readable format
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
    )
    # basicConfig is a no-op once handlers exist, so set the level explicitly
    logging.getLogger().setLevel(getattr(logging, log_level.upper()))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger wrapping the stdlib logger of the same name.
        Processors come from the current structlog configuration at bind time.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
