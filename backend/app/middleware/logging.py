"""
Shopfront Backend: Request Logging Middleware
==============================================

What:  One access-log line per HTTP request.
How:   Times the downstream call and logs method, path, status, duration,
       client address and, for authenticated requests, the user id that
       `app.auth.require_token` left on `request.state`.
When:  Runs inside RequestIDMiddleware, so the line carries the request id.

Example line:
    2026-01-15T12:00:00 [WARNING] shopfront.access [1f0c2a9e]: PATCH /products/4b1e… 403 3.2ms user=9a7c… from 10.0.0.4

Level follows the status: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
Request bodies and Authorization headers are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("shopfront.access")

SKIPPED_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        user_id = getattr(request.state, "user_id", None) or "anonymous"

        logger.log(
            log_level,
            "%s %s %d %.1fms user=%s from %s",
            request.method,
            path,
            status,
            duration_ms,
            user_id,
            client_ip,
            extra={
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "user_id": user_id,
                "client_ip": client_ip,
            },
        )

        return response
