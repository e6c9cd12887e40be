"""
Structured Logging

DESIGN DECISION: Every module logs through structlog on top of the stdlib
logging machinery. Events are short snake_case names with keyword context
(`log.warning("invalid_date", value=...)`), never pre-formatted sentences.

Logging is observability ONLY:
- It never changes a return value
- A logging failure never reaches the caller
- The host application owns handlers; we only configure processors and levels
"""

import logging
from typing import Optional

import structlog


PACKAGE_LOGGER = "finance_tracker"


def configure_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Configure structlog for the package.

    Args:
        level: Minimum level for package loggers. Defaults to LOG_LEVEL.
        json_output: Render JSON lines instead of console output.
                     Defaults to LOG_JSON.
    """
    if level is None or json_output is None:
        from finance_tracker.config import get_settings

        app_settings = get_settings().app
        level = level or app_settings.log_level
        json_output = app_settings.log_json if json_output is None else json_output

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.getLogger(PACKAGE_LOGGER).setLevel(level.upper())


def get_logger(name: str = PACKAGE_LOGGER) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to a stdlib logger of the given name."""
    return structlog.get_logger(name)


# Configure from LOG_LEVEL / LOG_JSON on import. Loggers are not cached, so a
# later configure_logging() call also applies to loggers already in use.
configure_logging()
