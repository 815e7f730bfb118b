"""
Shopfront Backend: Request ID Middleware
=========================================

What:  Gives every request a correlation id, returns it in `X-Request-ID`,
       and stamps it on every log record emitted while the request runs.
How:   The id is kept in a ContextVar. `RequestIDLogFilter`, installed on the
       root handler by `app.main.setup_logging`, copies it onto each record
       as `%(request_id)s`.
When:  Outermost application middleware, so the id exists before the access
       log and the route handler run.

A client-supplied `X-Request-ID` is reused (truncated to 64 characters) so a
frontend can correlate its own error reports with server logs.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

MAX_REQUEST_ID_LENGTH = 64


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        incoming = request.headers.get("X-Request-ID", "").strip()
        rid = incoming[:MAX_REQUEST_ID_LENGTH] if incoming else uuid.uuid4().hex[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response


class RequestIDLogFilter(logging.Filter):
    """Adds `request_id` to every record; "-" outside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True
