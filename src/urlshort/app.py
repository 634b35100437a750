"""ASGI application wrapper.

``App`` turns any urlshort handler into an ASGI 3.0 callable that a
server such as uvicorn, hypercorn, or pounce can host::

    from urlshort import App, not_found, yaml_handler

    app = App(yaml_handler(Path("redirects.yaml").read_bytes(), not_found))

The server is not part of this package.
"""

import logging

from urlshort._internal.asgi import Receive, Scope, Send
from urlshort.handlers import Handler
from urlshort.server.handler import handle_request

logger = logging.getLogger("urlshort.server")


class App:
    """ASGI entry point around a single handler.

    Handles the lifespan protocol itself, passes HTTP scopes to the
    request pipeline, and ignores everything else (websockets).
    """

    __slots__ = ("handler",)

    def __init__(self, handler: Handler) -> None:
        self.handler = handler

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, handler=self.handler)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge startup and shutdown; there is nothing to set up."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                logger.info("urlshort ready: %r", self.handler)
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
