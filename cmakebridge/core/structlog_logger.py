"""Structlog logger factory and utilities for cmakebridge."""

import logging
from typing import Any

import structlog


def get_struct_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger with the given name.

    The logger always wraps the stdlib logger of the same name, so events
    reach the stdlib handlers and ``isEnabledFor`` is available even when
    the host application never called ``setup_logging``.

    Args:
        name: The logger name, usually __name__

    Returns:
        A bound structlog logger instance

    Note: For exception logging with debug stack traces, use this pattern:
        try:
            # some operation
        except Exception as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error("operation_failed", error=str(e), exc_info=exc_info)
    """
    return structlog.wrap_logger(  # type: ignore[no-any-return]
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )


def get_struct_logger_with_context(
    name: str, **context: Any
) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger with bound context.

    Example:
        logger = get_struct_logger_with_context(__name__, target="zlib")
        logger.info("configure_started")  # includes target="zlib"
    """
    return get_struct_logger(name).bind(**context)
