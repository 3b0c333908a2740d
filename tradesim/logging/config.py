"""
Centralized logging configuration for the trading engine.

This module provides standardized logging configuration using structlog
for all components. Trade decisions are logged as structured events so a
session can be audited from the log stream alone.
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

    # Log records go to stderr so stdout stays reserved for action lines
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
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

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


def get_trade_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for trade and option decisions.

    The logger stays lazy so configure_logging applies even when it is
    created at import time.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger bound to the trading subsystem
    """
    return structlog.get_logger(
        name,
        subsystem="trading",
        audit_trail=True
    )


def get_settlement_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for end-of-session settlement.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger bound to the settlement subsystem
    """
    return structlog.get_logger(
        name,
        subsystem="settlement",
        audit_trail=True
    )


def log_trade_action(
    logger: FilteringBoundLogger,
    action: Any,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a trade action with standardized format.

    Args:
        logger: Structlog logger instance
        action: TradeAction being recorded
        context: Additional context data
    """
    bound_logger = logger.bind(
        instrument=action.instrument,
        action_type=action.action_type.value,
        quantity=action.quantity,
        price=action.price,
        amount=action.amount,
        tick=action.tick,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("trade_action")


def log_declined_decision(
    logger: FilteringBoundLogger,
    instrument: str,
    decision: str,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a decision that was evaluated but did not lead to an action.

    Args:
        logger: Structlog logger instance
        instrument: Instrument the decision was made for
        decision: Name of the decision (buy, sell, call_hedge, ...)
        reason: Outcome explaining why nothing happened
        context: Additional context data
    """
    bound_logger = logger.bind(
        instrument=instrument,
        decision=decision,
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("decision_declined")
