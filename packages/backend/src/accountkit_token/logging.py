"""
Centralized logging configuration using structlog
"""

import logging
import sys
from contextvars import ContextVar, Token
from typing import Any

import structlog

# Context variable for the strategy name handling the current request
strategy_ctx: ContextVar[str | None] = ContextVar("strategy", default=None)


class StrategyContextFilter:
    """Add the active strategy name to log records."""

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        _ = logger, method_name

        strategy = strategy_ctx.get()
        if strategy:
            event_dict["strategy"] = strategy

        return event_dict


def configure_logging(debug: bool = False, log_level: str | None = None) -> None:
    """Configure structlog with appropriate processors and formatters.

    Args:
        debug: If True, use human-readable console output and DEBUG level.
            If False, use JSON.
        log_level: Level name used when not in debug mode (default INFO)
    """

    # Determine log level
    if debug:
        level = logging.DEBUG
    else:
        level = logging.getLevelName((log_level or "INFO").upper())
        if not isinstance(level, int):
            level = logging.INFO

    # Configure stdlib logging
    logging.basicConfig(
        level=level,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        # Tag records emitted while a strategy is authenticating
        StrategyContextFilter(),
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        # Development: human-readable console output
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        # Production: JSON output
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def set_strategy_context(name: str | None) -> Token[str | None]:
    """Set the strategy name attached to subsequent log records.

    Returns the token to hand to ``reset_strategy_context`` once done.
    """
    return strategy_ctx.set(name)


def reset_strategy_context(token: Token[str | None]) -> None:
    """Restore the strategy name that was active before ``set_strategy_context``."""
    strategy_ctx.reset(token)


def clear_strategy_context() -> None:
    strategy_ctx.set(None)
