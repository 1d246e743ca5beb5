"""Request logging middleware.

Binds a request ID for the duration of each request and logs its completion
with status code and duration.
"""

from __future__ import annotations

import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from shared.observability import CorrelationContext, get_logger, log_request

logger = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with a correlating request ID."""

    # Probes would otherwise dominate the log
    SKIP_PATHS = {"/health", "/ready"}

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request with logging context."""
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        client_ip = request.client.host if request.client else None

        async with CorrelationContext(request_id=request_id):
            start = time.perf_counter()
            response = await call_next(request)
            log_request(
                logger,
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - start) * 1000,
                client_ip=client_ip,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
