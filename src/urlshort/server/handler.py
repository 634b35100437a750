"""ASGI handler — translates ASGI scope/messages to urlshort types.

The only component that touches raw HTTP scopes directly. Builds a
Request, runs the handler, and sends the Response back through ASGI
``send()``.
"""

import logging

from urlshort._internal.asgi import Receive, Scope, Send
from urlshort._internal.invoke import invoke
from urlshort.handlers import Handler
from urlshort.http.request import Request
from urlshort.http.response import Response
from urlshort.server.sender import send_response

logger = logging.getLogger("urlshort.server")


def internal_error(request: Request) -> Response:
    """Plain 500 for an exception the handler did not deal with."""
    logger.exception("500 %s %s", request.method, request.target)
    return Response(
        body="Internal Server Error",
        status=500,
        content_type="text/plain; charset=utf-8",
    )


async def handle_request(scope: Scope, receive: Receive, send: Send, *, handler: Handler) -> None:
    """Process a single HTTP request through *handler*."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)
    try:
        response = await invoke(handler, request)
    except Exception:
        response = internal_error(request)

    if not isinstance(response, Response):
        logger.error(
            "Handler returned %s for %s %s, expected Response",
            type(response).__name__,
            request.method,
            request.target,
        )
        response = Response(
            body="Internal Server Error",
            status=500,
            content_type="text/plain; charset=utf-8",
        )

    logger.debug("%d %s %s", response.status, request.method, request.target)
    await send_response(response, send)
