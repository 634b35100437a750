"""Async test client for urlshort applications.

Sends requests through the ASGI interface directly, with no HTTP involved,
and returns the same ``Response`` type the handlers produce.
"""

import asyncio
from urllib.parse import unquote
from collections.abc import MutableMapping
from typing import Any

from urlshort._internal.asgi import Scope
from urlshort.app import App
from urlshort.http.response import Response


class TestClient:
    """Async test client for an ``App``.

    Entering the context runs the ASGI lifespan startup; leaving it
    runs shutdown. Usage::

        async with TestClient(App(handler)) as client:
            response = await client.get("/urlshort-godoc")
            assert response.status == 302
    """

    __test__ = False  # Tell pytest this is not a test class

    __slots__ = ("_lifespan_queue", "_lifespan_task", "app", "lifespan_events")

    def __init__(self, app: App) -> None:
        self.app = app
        self.lifespan_events: list[str] = []
        self._lifespan_queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self._lifespan_task: asyncio.Task[None] | None = None

    async def __aenter__(self) -> "TestClient":
        started = asyncio.Event()

        async def send(message: MutableMapping[str, Any]) -> None:
            self.lifespan_events.append(message["type"])
            if message["type"] == "lifespan.startup.complete":
                started.set()

        scope: Scope = {"type": "lifespan", "asgi": {"version": "3.0"}}
        self._lifespan_task = asyncio.create_task(
            self.app(scope, self._lifespan_queue.get, send)
        )
        await self._lifespan_queue.put({"type": "lifespan.startup"})
        await started.wait()
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._lifespan_task is None:
            return
        await self._lifespan_queue.put({"type": "lifespan.shutdown"})
        await self._lifespan_task
        self._lifespan_task = None

    async def get(self, path: str) -> Response:
        """Send a GET request."""
        return await self.request("GET", path)

    async def head(self, path: str) -> Response:
        """Send a HEAD request."""
        return await self.request("HEAD", path)

    async def post(self, path: str, *, body: bytes | None = None) -> Response:
        """Send a POST request."""
        return await self.request("POST", path, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: bytes | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app.

        *path* is the request target as it would appear on the wire:
        percent-escapes stay in ``raw_path`` and are decoded into ``path``.
        """
        path_part, _, query_string = path.partition("?")

        scope: Scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": unquote(path_part),
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": [(b"host", b"testserver")],
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        request_body = body or b""
        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": request_body, "more_body": False}
            return {"type": "http.disconnect"}

        response_status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                response_body_parts.append(message.get("body", b""))

        await self.app(scope, receive, send)

        content_type = "text/html; charset=utf-8"
        extra_headers: list[tuple[str, str]] = []
        for name_b, value_b in response_headers:
            name_str = name_b.decode("latin-1")
            value_str = value_b.decode("latin-1")
            if name_str == "content-type":
                content_type = value_str
            elif name_str != "content-length":
                extra_headers.append((name_str, value_str))

        return Response(
            body=b"".join(response_body_parts),
            status=response_status,
            content_type=content_type,
            headers=tuple(extra_headers),
        )
