"""Error handling pipeline for requests.

Maps HTTPError exceptions and unexpected failures raised by middleware
or the router to plain-text responses built by ``serve_error``.
"""

import logging

from spaserve.content import serve_error
from spaserve.errors import HTTPError
from spaserve.http.request import Request
from spaserve.http.response import Response

logger = logging.getLogger("spaserve.server")


def handle_http_error(exc: HTTPError, request: Request, *, debug: bool) -> Response:
    """Map an HTTPError to a Response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"
    return serve_error(exc.status, detail, headers=exc.headers)


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    if debug:
        return serve_error(500, f"500 Internal Server Error: {type(exc).__name__}: {exc}")
    return serve_error(500, "500 Internal Server Error")
