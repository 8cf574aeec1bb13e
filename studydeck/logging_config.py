import logging
import sys
from collections.abc import Callable
from typing import Any

import structlog


def configure_logging(environment: str = "development", debug: bool = False) -> None:
    """Route structlog through stdlib logging.

    Production renders one JSON object per line; anything else gets the
    colored console renderer. ``debug`` (settings.DEBUG) lowers the level.
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger().setLevel(level)
    # SQL statements are only worth seeing when asked for explicitly
    logging.getLogger("django.db.backends").setLevel(logging.INFO)

    shared: list[Callable[..., Any]] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if environment == "production":
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        # ConsoleRenderer prints tracebacks itself
        renderers = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=shared + renderers,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
