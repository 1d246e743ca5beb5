"""Structured logging configuration.

Every log line carries the service name and environment, plus whichever
correlation IDs are bound for the current task:
- ``request_id`` for API requests
- ``scrape_id`` for one /metrics collection pass, shared by every resource
  fetch started within it
"""

import logging
import sys
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar, Token
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from shared.config import LogFormat, LogLevel, get_settings

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
scrape_id_var: ContextVar[str | None] = ContextVar("scrape_id", default=None)

# SDK and server loggers that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "botocore", "aiobotocore", "uvicorn.access")


def add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    settings = get_settings()
    event_dict["service"] = settings.app_name
    event_dict["version"] = settings.app_version
    event_dict["environment"] = settings.environment.value
    return event_dict


def add_correlation_ids(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    for var in (request_id_var, scrape_id_var):
        if value := var.get():
            event_dict.setdefault(var.name, value)
    return event_dict


def _enum_value(value: Any) -> str:
    return value.value if hasattr(value, "value") else str(value)


def _renderer(log_format: LogFormat | str) -> list[Processor]:
    if _enum_value(log_format).lower() == LogFormat.JSON.value:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def setup_logging(
    log_level: LogLevel | str | None = None,
    log_format: LogFormat | str | None = None,
) -> None:
    """Configure structlog on top of stdlib logging.

    Args:
        log_level: Override log level (defaults to settings.log_level)
        log_format: Override log format (defaults to settings.log_format)
    """
    settings = get_settings()
    level = getattr(logging, _enum_value(log_level or settings.log_level).upper())

    logging.basicConfig(level=level, stream=sys.stdout, format="%(message)s")

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        add_service_context,
        add_correlation_ids,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    processors += _renderer(log_format or settings.log_format)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


class CorrelationContext:
    """Bind correlation IDs for the enclosed block.

    IDs left as None are not touched, so a scrape started inside a request
    keeps the request ID as well. Tasks created inside the block inherit the
    bound values.

    Usage:
        async with CorrelationContext(scrape_id=uuid4().hex):
            await collect()
    """

    def __init__(self, request_id: str | None = None, scrape_id: str | None = None):
        self._values = {request_id_var: request_id, scrape_id_var: scrape_id}
        self._tokens: list[tuple[ContextVar, Token]] = []

    def __enter__(self) -> "CorrelationContext":
        for var, value in self._values.items():
            if value:
                self._tokens.append((var, var.set(value)))
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        while self._tokens:
            var, token = self._tokens.pop()
            var.reset(token)

    async def __aenter__(self) -> "CorrelationContext":
        return self.__enter__()

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


def log_request(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
    client_ip: str | None = None,
) -> None:
    """Log a completed HTTP request, at warning/error level for 4xx/5xx."""
    log_level = "info" if status_code < 400 else "warning" if status_code < 500 else "error"
    getattr(logger, log_level)(
        "Request completed",
        http_method=method,
        http_path=path,
        http_status=status_code,
        client_ip=client_ip,
        duration_ms=round(duration_ms, 2),
    )


@asynccontextmanager
async def provider_call(
    logger: structlog.stdlib.BoundLogger,
    provider: str,
    operation: str,
    **context: Any,
) -> AsyncIterator[None]:
    """Time an outbound provider call and log its outcome.

    Any exception leaving the block is logged as a failed call and re-raised
    unchanged.
    """
    log_data = {"provider": provider, "provider_operation": operation, **context}
    logger.debug("Provider call started", **log_data)
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        logger.warning(
            "Provider call failed",
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            error=str(e),
            **log_data,
        )
        raise
    logger.debug(
        "Provider call completed",
        duration_ms=round((time.perf_counter() - start) * 1000, 2),
        **log_data,
    )
