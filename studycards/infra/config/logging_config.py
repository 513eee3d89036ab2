"""
Structlog setup for the API and its storage adapters.

Log lines are rendered as JSON in deployed environments and as colored
key/value text when ``LOG_FORMAT=console``. Every line carries the app
name and environment; request handlers add their own context through
:func:`bind_context`.
"""

from __future__ import annotations

import logging
from typing import Any, MutableMapping, Optional

import structlog

# Libraries that log every statement or connection at INFO.
_CHATTY_LOGGERS = ("aiosqlite", "sqlalchemy.engine", "uvicorn.access")


def _service_fields(app_name: str, environment: str):
    def add_service(
        logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        event_dict.setdefault("service", app_name)
        event_dict.setdefault("env", environment)
        return event_dict

    return add_service


def setup_logging(
    log_level: Optional[str] = None, log_format: Optional[str] = None
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: level name such as "DEBUG"; defaults to ``LOG_LEVEL``.
        log_format: "json" or "console"; defaults to ``LOG_FORMAT``.
    """
    from studycards.infra.config.settings import get_settings

    settings = get_settings()
    level = logging.getLevelName((log_level or settings.log_level).upper())
    if not isinstance(level, int):
        level = logging.INFO
    as_json = (log_format or settings.log_format).lower() == "json"

    logging.basicConfig(level=level, format="%(message)s")
    quiet = logging.INFO if settings.debug_sql else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, quiet))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.stdlib.add_logger_name,
            _service_fields(settings.app_name, settings.environment),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True)
            if as_json
            else structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_context(**kwargs) -> None:
    """Attach values (request_id, deck_id, user_id) to every later log line."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
