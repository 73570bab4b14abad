"""
compose_store.observability.logging

Structured logging for processes that host the store.

Responsibilities:
- Configure `structlog` from `Settings`: readable console lines in dev, JSON elsewhere.
- Stamp every event with the service name and environment.
- Keep SQLAlchemy's engine logger quiet unless SQL echo is requested.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from compose_store.settings import Settings


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.echo_sql else logging.WARNING
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _static_fields(service=settings.service_name, env=settings.env),
    ]
    if settings.env == "dev":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # Caching freezes loggers on first use; only prod never reconfigures.
        cache_logger_on_first_use=settings.env == "prod",
    )


def _static_fields(**fields: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Only pool lifecycle events are emitted from inside the store; operation
# failures are raised to the caller, which decides whether to log them.
