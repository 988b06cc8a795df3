"""ASGI handler — translates ASGI scope/messages to spaserve types.

The only component that touches raw ASGI HTTP scopes directly. Converts
the scope to a typed Request, dispatches through middleware and the
router, and sends the Response back through ASGI send().
"""

from collections.abc import Callable
from typing import Any

import anyio.to_thread

from spaserve._internal.asgi import Receive, Scope, Send
from spaserve.errors import HTTPError
from spaserve.http.request import Request
from spaserve.http.response import Response
from spaserve.middleware.protocol import Next
from spaserve.router import SPARouter
from spaserve.server.errors import handle_http_error, handle_internal_error
from spaserve.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: SPARouter,
    middleware: tuple[Callable[..., Any], ...],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    try:
        # Store I/O blocks, so the routing decision runs in a worker thread.
        async def dispatch(req: Request) -> Response:
            return await anyio.to_thread.run_sync(router.respond, req)

        # Wrap middleware around the dispatch
        handler: Next = dispatch
        for mw in reversed(middleware):
            outer = handler
            mw_ref = mw

            async def make_next(req: Request, _mw: Any = mw_ref, _next: Next = outer) -> Response:
                return await _mw(req, _next)

            handler = make_next

        response = await handler(request)

    except HTTPError as exc:
        response = handle_http_error(exc, request, debug=debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=debug)

    await send_response(response, send, head=request.method == "HEAD")
