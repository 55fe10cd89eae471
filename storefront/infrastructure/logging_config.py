"""structlog configuration.

Call ``configure_logging`` once at process start-up. Modules obtain their
logger with ``structlog.get_logger()`` and log keyword events; request-scoped
fields such as ``request_id`` are merged from contextvars.
"""

import logging

import structlog

from storefront.infrastructure.config import settings


def configure_logging(level: str | None = None, json: bool | None = None) -> None:
    """Configure structlog processors and level filtering.

    Args:
        level: Minimum level name (e.g. "INFO"). Defaults to settings.
        json: Render JSON lines instead of console output. Defaults to settings.
    """
    level_name = (level or settings.log_level).upper()
    render_json = settings.log_json if json is None else json

    if render_json:
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
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
        cache_logger_on_first_use=False,
    )
