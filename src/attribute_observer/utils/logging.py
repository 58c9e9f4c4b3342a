"""Structured logging helpers for attribute_observer."""

from __future__ import annotations

import logging
import os
import time
import uuid
from contextvars import ContextVar
from typing import Optional

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

LOGGER_NAME = "attribute_observer"
LOG_LEVEL_ENV_VAR = "ATTRIBUTE_OBSERVER_LOG_LEVEL"


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def configure_logging(level: Optional[int] = None) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return
    if level is None:
        level = _level_from_env()
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level)


def _level_from_env() -> int:
    name = os.getenv(LOG_LEVEL_ENV_VAR, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or str(uuid.uuid4())
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    cid = _correlation_id.get()
    if cid is None:
        cid = set_correlation_id()
    return cid


def time_call(name: str, logger: logging.Logger, *, threshold_ms: int = 100, **extra_fields):
    start = time.monotonic()

    class Timer:
        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            elapsed_ms = (time.monotonic() - start) * 1000
            level = logging.WARNING if elapsed_ms >= threshold_ms else logging.DEBUG
            extra = dict(extra_fields, elapsed_ms=elapsed_ms)
            logger.log(level, "%s took %.2fms", name, elapsed_ms, extra=extra)

    return Timer()
