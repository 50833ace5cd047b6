"""
Request ID middleware.

Every request gets an id (client supplied X-Request-ID or a fresh UUID).
It is echoed back in the response headers and attached to every log
record emitted while the request is being handled, so all logs for one
order submission can be correlated.
"""

import uuid
import logging
from contextvars import ContextVar
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIDLogFilter(logging.Filter):
    """Stamps the current request id onto each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _request_id_var.get()
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        request.state.request_id = request_id
        token = _request_id_var.set(request_id)

        try:
            response: Response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _request_id_var.reset(token)


def get_request_id(request: Request) -> str:
    """
    Request id stored on the request state, or "no-request-id" when the
    middleware did not run (e.g. in unit tests calling handlers directly).
    """
    return getattr(request.state, "request_id", "no-request-id")
