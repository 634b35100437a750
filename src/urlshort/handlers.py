"""Redirect dispatch — exact-match lookup with a fallback handler.

A handler is any callable matching::

    async def handler(request: Request) -> Response: ...

Plain ``def`` handlers work too. No base class required; the dispatcher
only calls the fallback, it never inspects it.

Usage::

    from urlshort import map_handler, not_found, yaml_handler

    paths = {"/urlshort-godoc": "https://godoc.org/github.com/gophercises/urlshort"}
    handler = map_handler(paths, fallback=not_found)

    handler = yaml_handler(Path("redirects.yaml").read_bytes(), fallback=handler)
"""

import logging
from collections.abc import Awaitable, Iterator, Mapping
from types import MappingProxyType
from typing import Protocol

from urlshort._internal.invoke import invoke
from urlshort.config import ShortenerConfig
from urlshort.http.request import Request
from urlshort.http.response import Redirect, Response
from urlshort.parsing import parse_json, parse_yaml

logger = logging.getLogger("urlshort.handlers")


class Handler(Protocol):
    """Anything that answers one request with one response.

    Accepts both functions and callable objects::

        # Function handler
        async def hello(request: Request) -> Response:
            return Response("Hello, world!")

        # Class handler
        class Maintenance:
            def __call__(self, request: Request) -> Response:
                return Response("Back soon", status=503)
    """

    def __call__(self, request: Request) -> Response | Awaitable[Response]: ...


def lookup_key(request: Request, config: ShortenerConfig) -> str:
    """The mapping key for *request* under *config*.

    Keys are compared in on-the-wire form: a mapping key of ``/a%20b``
    matches a request for ``/a%20b``, and an escaped ``%3F`` never splits
    the path from the query.
    """
    if config.match_query_string:
        return request.target
    return request.escaped_path


class MapHandler:
    """Redirect mapped paths; hand everything else to ``fallback``.

    The mapping is copied at construction and exposed read-only, so the
    handler is safe to call from many concurrent requests and later
    changes to the caller's dict have no effect.
    """

    __slots__ = ("_paths", "config", "fallback")

    def __init__(
        self,
        paths_to_urls: Mapping[str, str],
        fallback: Handler,
        *,
        config: ShortenerConfig | None = None,
    ) -> None:
        self._paths: Mapping[str, str] = MappingProxyType(dict(paths_to_urls))
        self.fallback = fallback
        self.config = config or ShortenerConfig()

    async def __call__(self, request: Request) -> Response:
        key = lookup_key(request, self.config)
        url = self._paths.get(key)
        if url is None:
            return await invoke(self.fallback, request)
        logger.debug("%s %s -> %d %s", request.method, key, self.config.redirect_status, url)
        return Redirect(url, status=self.config.redirect_status).to_response(request.method)

    # -- Introspection --

    @property
    def paths(self) -> Mapping[str, str]:
        """Read-only view of the path -> URL mapping."""
        return self._paths

    def lookup(self, key: str) -> str | None:
        """Destination URL for *key*, or None when unmapped."""
        return self._paths.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"MapHandler({len(self._paths)} redirect(s), fallback={self.fallback!r})"


def map_handler(
    paths_to_urls: Mapping[str, str],
    fallback: Handler,
    *,
    config: ShortenerConfig | None = None,
) -> MapHandler:
    """Build a handler that redirects the paths in *paths_to_urls*.

    Requests whose key is not in the mapping are passed unchanged to
    *fallback*, exactly once.
    """
    return MapHandler(paths_to_urls, fallback, config=config)


def yaml_handler(
    document: bytes | str,
    fallback: Handler,
    *,
    config: ShortenerConfig | None = None,
) -> MapHandler:
    """Parse a YAML redirect document and build a ``MapHandler`` from it.

    The document is expected in the form::

        - path: /some-path
          url: https://www.some-url.com/demo

    Raises:
        ParseError: If the document is malformed. No handler is built.
    """
    return MapHandler(parse_yaml(document), fallback, config=config)


def json_handler(
    document: bytes | str,
    fallback: Handler,
    *,
    config: ShortenerConfig | None = None,
) -> MapHandler:
    """Parse a JSON redirect document and build a ``MapHandler`` from it.

    Raises:
        ParseError: If the document is malformed. No handler is built.
    """
    return MapHandler(parse_json(document), fallback, config=config)


async def not_found(request: Request) -> Response:
    """Default fallback: plain-text 404."""
    return Response(
        body=f"404 page not found: {request.path}\n",
        status=404,
        content_type="text/plain; charset=utf-8",
    )
