"""Structured logging with request and scrape correlation."""

from .logging import (
    CorrelationContext,
    get_logger,
    log_request,
    provider_call,
    request_id_var,
    scrape_id_var,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "CorrelationContext",
    "request_id_var",
    "scrape_id_var",
    "log_request",
    "provider_call",
]
