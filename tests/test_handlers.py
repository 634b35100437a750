"""Tests for urlshort.handlers — redirect on match, delegate on miss."""

import asyncio

import pytest

from urlshort.config import ShortenerConfig
from urlshort.errors import ParseError
from urlshort.handlers import (
    MapHandler,
    json_handler,
    map_handler,
    not_found,
    yaml_handler,
)
from urlshort.http.request import Request
from urlshort.http.response import Response

GODOC = "https://godoc.org/github.com/gophercises/urlshort"
YAML_DOC = f"- path: /urlshort-godoc\n  url: {GODOC}\n"


class RecordingFallback:
    """Fallback that records every request it receives."""

    def __init__(self) -> None:
        self.calls: list[Request] = []

    async def __call__(self, request: Request) -> Response:
        self.calls.append(request)
        return Response("Hello, world!")


def _request(target: str, method: str = "GET") -> Request:
    path, _, query = target.partition("?")
    return Request(method=method, path=path, query_string=query)


def _scope_request(path: str, raw_path: bytes, query_string: bytes = b"") -> Request:
    """Request as an ASGI server would build it: decoded path, escaped raw_path."""
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "raw_path": raw_path,
        "query_string": query_string,
    }
    return Request.from_asgi(scope)


class TestMapHandler:
    @pytest.mark.anyio
    async def test_hit_redirects_with_302(self) -> None:
        fallback = RecordingFallback()
        handler = map_handler({"/dogs": "https://dogs.example"}, fallback)

        response = await handler(_request("/dogs"))

        assert response.status == 302
        assert response.location == "https://dogs.example"
        assert fallback.calls == []

    @pytest.mark.anyio
    async def test_miss_delegates_once_with_same_request(self) -> None:
        fallback = RecordingFallback()
        handler = map_handler({"/dogs": "https://dogs.example"}, fallback)
        request = _request("/cats")

        response = await handler(request)

        assert len(fallback.calls) == 1
        assert fallback.calls[0] is request
        assert response.status == 200
        assert response.text == "Hello, world!"
        assert response.location is None

    @pytest.mark.anyio
    async def test_sync_fallback(self) -> None:
        def fallback(request: Request) -> Response:
            return Response(f"sync {request.path}")

        handler = map_handler({}, fallback)
        response = await handler(_request("/anything"))
        assert response.text == "sync /anything"

    @pytest.mark.anyio
    async def test_fallback_errors_propagate(self) -> None:
        async def broken(request: Request) -> Response:
            raise RuntimeError("boom")

        handler = map_handler({"/a": "https://a"}, broken)
        with pytest.raises(RuntimeError, match="boom"):
            await handler(_request("/b"))

    @pytest.mark.anyio
    async def test_get_has_link_body(self) -> None:
        handler = map_handler({"/a": "https://a.example/?q=1&r=2"}, not_found)
        response = await handler(_request("/a"))
        assert response.text == '<a href="https://a.example/?q=1&amp;r=2">Found</a>.\n'

    @pytest.mark.anyio
    async def test_post_has_empty_body(self) -> None:
        handler = map_handler({"/a": "https://a.example"}, not_found)
        response = await handler(_request("/a", method="POST"))
        assert response.status == 302
        assert response.body == ""

    @pytest.mark.anyio
    async def test_query_string_is_part_of_key(self) -> None:
        fallback = RecordingFallback()
        handler = map_handler({"/a?x=1": "https://x1.example"}, fallback)

        hit = await handler(_request("/a?x=1"))
        miss = await handler(_request("/a"))

        assert hit.location == "https://x1.example"
        assert miss.location is None
        assert len(fallback.calls) == 1

    @pytest.mark.anyio
    async def test_escaped_path_matches_escaped_key(self) -> None:
        handler = map_handler({"/a%20b": "https://space.example"}, not_found)
        response = await handler(_scope_request("/a b", b"/a%20b"))
        assert response.status == 302
        assert response.location == "https://space.example"

    @pytest.mark.anyio
    async def test_encoded_question_mark_is_not_a_query(self) -> None:
        fallback = RecordingFallback()
        handler = map_handler({"/a?x=1": "https://x1.example"}, fallback)

        response = await handler(_scope_request("/a?x=1", b"/a%3Fx=1"))

        assert response.status == 200
        assert response.location is None
        assert len(fallback.calls) == 1

    @pytest.mark.anyio
    async def test_encoded_question_mark_misses_with_not_found(self) -> None:
        handler = map_handler({"/a?x=1": "https://x1.example"}, not_found)
        response = await handler(_scope_request("/a?x=1", b"/a%3Fx=1"))
        assert response.status == 404

    @pytest.mark.anyio
    async def test_path_only_lookup(self) -> None:
        config = ShortenerConfig(match_query_string=False)
        handler = map_handler({"/a": "https://a.example"}, not_found, config=config)
        response = await handler(_request("/a?utm_source=mail"))
        assert response.location == "https://a.example"

    @pytest.mark.anyio
    async def test_path_only_lookup_uses_escaped_path(self) -> None:
        config = ShortenerConfig(match_query_string=False)
        handler = map_handler({"/a%20b": "https://space.example"}, not_found, config=config)
        response = await handler(_scope_request("/a b", b"/a%20b", b"ref=x"))
        assert response.location == "https://space.example"

    @pytest.mark.anyio
    async def test_custom_redirect_status(self) -> None:
        config = ShortenerConfig(redirect_status=301)
        handler = map_handler({"/a": "https://a.example"}, not_found, config=config)
        response = await handler(_request("/a"))
        assert response.status == 301
        assert "Moved Permanently" in response.text

    @pytest.mark.anyio
    async def test_mapping_snapshot_at_construction(self) -> None:
        paths = {"/a": "https://a.example"}
        handler = map_handler(paths, not_found)
        paths["/a"] = "https://changed.example"
        paths["/b"] = "https://b.example"

        response = await handler(_request("/a"))
        assert response.location == "https://a.example"
        assert "/b" not in handler

    def test_paths_view_is_read_only(self) -> None:
        handler = map_handler({"/a": "https://a"}, not_found)
        with pytest.raises(TypeError):
            handler.paths["/b"] = "https://b"  # type: ignore[index]

    def test_introspection(self) -> None:
        handler = map_handler({"/a": "https://a", "/b": "https://b"}, not_found)
        assert isinstance(handler, MapHandler)
        assert len(handler) == 2
        assert "/a" in handler
        assert sorted(handler) == ["/a", "/b"]
        assert handler.lookup("/b") == "https://b"
        assert handler.lookup("/c") is None
        assert "2 redirect(s)" in repr(handler)

    @pytest.mark.anyio
    async def test_concurrent_requests(self) -> None:
        fallback = RecordingFallback()
        handler = map_handler({f"/{i}": f"https://{i}.example" for i in range(50)}, fallback)

        responses = await asyncio.gather(
            *(handler(_request(f"/{i}")) for i in range(100))
        )

        for i, response in enumerate(responses):
            if i < 50:
                assert response.location == f"https://{i}.example"
            else:
                assert response.location is None
        assert len(fallback.calls) == 50

    @pytest.mark.anyio
    async def test_handlers_compose_as_fallbacks(self) -> None:
        inner = map_handler({"/inner": "https://inner.example"}, not_found)
        outer = map_handler({"/outer": "https://outer.example"}, inner)

        assert (await outer(_request("/outer"))).location == "https://outer.example"
        assert (await outer(_request("/inner"))).location == "https://inner.example"
        assert (await outer(_request("/nowhere"))).status == 404


class TestDocumentHandlers:
    @pytest.mark.anyio
    async def test_yaml_handler_godoc_scenario(self) -> None:
        fallback = RecordingFallback()
        handler = yaml_handler(YAML_DOC.encode(), fallback)

        found = await handler(_request("/urlshort-godoc"))
        assert found.status == 302
        assert found.location == GODOC
        assert fallback.calls == []

        unknown = _request("/unknown")
        await handler(unknown)
        assert fallback.calls == [unknown]

    def test_yaml_handler_parse_error(self) -> None:
        with pytest.raises(ParseError):
            yaml_handler(b"- path: /a\n", not_found)

    @pytest.mark.anyio
    async def test_json_handler(self) -> None:
        doc = f'[{{"path": "/urlshort-godoc", "url": "{GODOC}"}}]'
        handler = json_handler(doc, not_found)
        response = await handler(_request("/urlshort-godoc"))
        assert response.location == GODOC

    def test_json_handler_parse_error(self) -> None:
        with pytest.raises(ParseError):
            json_handler("[{", not_found)


class TestNotFound:
    @pytest.mark.anyio
    async def test_plain_404(self) -> None:
        response = await not_found(_request("/missing"))
        assert response.status == 404
        assert response.content_type.startswith("text/plain")
        assert "/missing" in response.text
