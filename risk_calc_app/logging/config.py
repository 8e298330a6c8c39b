"""
Centralized logging configuration for the risk calculator.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the package should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
        stream: Output stream, stdout when omitted
    """
    log_level = getattr(logging, level.upper())
    stream = stream or sys.stdout

    logging.basicConfig(
        level=log_level,
        stream=stream,
        format="%(message)s",
        force=True,
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
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

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


def get_calculation_logger(name: str) -> FilteringBoundLogger:
    """Logger bound with calculator audit context."""
    return get_logger(name).bind(
        subsystem="calculator",
        audit_trail=True
    )


def get_session_logger(name: str) -> FilteringBoundLogger:
    """Logger bound with form-session context."""
    return get_logger(name).bind(
        subsystem="session",
        audit_trail=True
    )


def log_validation_outcome(
    logger: FilteringBoundLogger,
    field: str,
    passed: bool,
    reason: str,
    value: Any = None,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a per-field validation decision with standardized format.

    Args:
        logger: Structlog logger instance
        field: Error-set key of the field being checked
        passed: Whether the field was accepted
        reason: Rule description or the user-facing rejection message
        value: Raw value that was checked
        context: Additional context data
    """
    bound_logger = logger.bind(
        field=field,
        field_result="PASS" if passed else "FAIL",
        reason=reason,
        value=value,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if passed:
        bound_logger.debug("field_validation")
    else:
        bound_logger.warning("field_validation")


def log_session_transition(
    logger: FilteringBoundLogger,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a fresh/stale transition of the displayed outcome.

    Args:
        logger: Structlog logger instance
        from_state: Current freshness
        to_state: Target freshness
        trigger: What caused the transition (field name or "calculate")
        context: Additional context data
    """
    bound_logger = logger.bind(
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("session_transition")
