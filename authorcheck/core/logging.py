from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from authorcheck.core.config import get_settings
from authorcheck.utils.trace import trace_id_ctx

_configured = False


def _add_trace_id(_, __, event_dict: dict) -> dict:
    trace_id = trace_id_ctx.get()
    if trace_id and "trace_id" not in event_dict:
        event_dict["trace_id"] = trace_id
    return event_dict


def configure_logging(level: int = logging.INFO, stream: TextIO = sys.stdout) -> None:
    global _configured
    if _configured:
        return

    settings = get_settings()
    logging.basicConfig(format="%(message)s", stream=stream, level=level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_trace_id,
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.environment == "development":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.extend([structlog.processors.format_exc_info, structlog.processors.JSONRenderer()])

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
