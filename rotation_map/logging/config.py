"""
Centralized logging configuration for the rotation map engine.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the system should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    # Log lines go to stderr so the console dashboard owns stdout
    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s"
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_signal_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for rotation signal output.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for rotation signals
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="rotation_signals",
        audit_trail=True
    )


def log_signal_emitted(
    logger: FilteringBoundLogger,
    signal_kind: str,
    message: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an emitted rotation signal with standardized format.

    Args:
        logger: Structlog logger instance
        signal_kind: Signal category (sector_leading, coin_capitulation, ...)
        message: Human-readable signal message
        context: Additional context data
    """
    bound_logger = logger.bind(
        signal_kind=signal_kind,
        signal_message=message,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Rotation signal emitted")


def log_refresh_outcome(
    logger: FilteringBoundLogger,
    refresh_id: int,
    outcome: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the outcome of one refresh tick.

    Args:
        logger: Structlog logger instance
        refresh_id: Sequence number of the refresh
        outcome: applied, stale, fetch_failed or rejected
        context: Additional context data
    """
    bound_logger = logger.bind(
        refresh_id=refresh_id,
        refresh_outcome=outcome,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if outcome == "applied":
        bound_logger.info("Refresh applied")
    else:
        bound_logger.warning("Refresh not applied")
