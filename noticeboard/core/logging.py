from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger import jsonlogger

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
operation_ctx: ContextVar[str | None] = ContextVar("operation", default=None)


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        record.op = operation_ctx.get()
        record.timestamp = datetime.now(timezone.utc).isoformat()
        record.path = getattr(record, "path", None)
        record.method = getattr(record, "method", None)
        record.status_code = getattr(record, "status_code", None)
        record.latency_ms = getattr(record, "latency_ms", None)
        record.error = getattr(record, "error", None)
        return True


def setup_logging(level: str, stream: Any = None) -> None:
    logger = logging.getLogger()
    logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stdout)
    formatter = jsonlogger.JsonFormatter(
        "%(timestamp)s %(levelname)s %(message)s %(request_id)s %(op)s "
        "%(path)s %(method)s %(status_code)s %(latency_ms)s %(error)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(ContextFilter())

    logger.handlers.clear()
    logger.addHandler(handler)


def log_info(message: str, **kwargs: Any) -> None:
    logging.getLogger(__name__).info(message, extra=kwargs)


def log_error(message: str, **kwargs: Any) -> None:
    logging.getLogger(__name__).error(message, extra=kwargs)
