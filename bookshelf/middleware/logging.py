"""
Bookshelf API — Request Logging Middleware
============================================

What:  One access-log line per HTTP request, with status and duration.
How:   Times the downstream call, then logs the matched route template
       (e.g. `/books/{book_id}`) rather than the raw URL, so every request
       for a single book lands under the same access-log key. The concrete
       book id travels in the record's `book_id` extra field.
Who:   Applied to every request via Starlette middleware.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bookshelf.middleware.request_id import request_id_var

logger = logging.getLogger("bookshelf.access")

UNMATCHED_ROUTE = "<unmatched>"


def route_template(request: Request) -> str:
    """
    Path template of the route that served `request`.

    Routing stores the matched APIRoute in the shared ASGI scope, so it is
    visible here once the downstream call has returned. Requests no route
    matched (404 on an unknown path) are grouped under one key.
    """
    route = request.scope.get("route")
    return getattr(route, "path_format", None) or UNMATCHED_ROUTE


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access log for the books API.

    Level by status:
        5xx → ERROR, 4xx → WARNING, everything else → INFO

    /health is skipped; probes hit it every few seconds.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/health":
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        route = route_template(request)
        status = response.status_code
        rid = request_id_var.get("")

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s]",
            request.method,
            route,
            status,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "book_id": request.path_params.get("book_id"),
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
            },
        )

        return response
