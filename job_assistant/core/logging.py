"""structlog configuration.

Modules log with key-value events:

    logger = structlog.get_logger()
    logger.warning("Onboarding table missing", user_id=user_id, table=table)

configure_logging() is called once by the app factory. Console rendering
is the default; LOG_JSON=true switches to one JSON object per line.
"""

import logging

import structlog

from job_assistant.core.config import Settings


def configure_logging(config: Settings) -> None:
    """Configure structlog processors and the minimum log level.

    Args:
        config: Settings providing log_level and log_json.
    """
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer: structlog.types.Processor
    if config.log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
