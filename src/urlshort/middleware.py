"""Middleware protocol and the redirect middleware.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

``RedirectMiddleware`` is the middleware form of ``MapHandler``: matched
requests are redirected, everything else continues down the chain.
``chain`` wraps a terminal handler in a stack of middleware.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType
from typing import Protocol

from urlshort._internal.invoke import invoke
from urlshort.config import ShortenerConfig
from urlshort.handlers import Handler, lookup_key
from urlshort.http.request import Request
from urlshort.http.response import Redirect, Response

logger = logging.getLogger("urlshort.middleware")

# The next handler in the middleware chain
type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for urlshort middleware.

    Accepts both functions and callable objects::

        async def tag(request: Request, next: Next) -> Response:
            response = await next(request)
            return response.with_header("X-Shortener", "urlshort")
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...


class RedirectMiddleware:
    """Redirect mapped paths before the rest of the chain sees them.

    Usage::

        from urlshort.middleware import RedirectMiddleware, chain

        handler = chain(site, RedirectMiddleware(parse_yaml(document)))
    """

    __slots__ = ("_paths", "config")

    def __init__(
        self,
        paths_to_urls: Mapping[str, str],
        *,
        config: ShortenerConfig | None = None,
    ) -> None:
        self._paths: Mapping[str, str] = MappingProxyType(dict(paths_to_urls))
        self.config = config or ShortenerConfig()

    @property
    def paths(self) -> Mapping[str, str]:
        """Read-only view of the path -> URL mapping."""
        return self._paths

    async def __call__(self, request: Request, next: Next) -> Response:
        key = lookup_key(request, self.config)
        url = self._paths.get(key)
        if url is None:
            return await next(request)
        logger.debug("%s %s -> %d %s", request.method, key, self.config.redirect_status, url)
        return Redirect(url, status=self.config.redirect_status).to_response(request.method)


def chain(handler: Handler, *middleware: Middleware) -> Next:
    """Wrap *handler* in *middleware*; the first middleware runs outermost."""

    async def terminal(request: Request) -> Response:
        return await invoke(handler, request)

    wrapped: Next = terminal
    for mw in reversed(middleware):
        wrapped = _bind(mw, wrapped)
    return wrapped


def _bind(mw: Middleware, next: Next) -> Next:
    async def call(request: Request) -> Response:
        return await mw(request, next)

    return call
