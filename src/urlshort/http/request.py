"""Immutable HTTP request.

Frozen metadata built once from the ASGI scope. Redirect dispatch never
reads the body or the headers, so the request carries neither.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the percent-decoded path from the scope. ``raw_path`` is the
    path exactly as it arrived on the wire (``%20`` stays ``%20``); empty
    when the server did not report one. ``query_string`` is the raw query
    without the leading ``?``.
    """

    method: str
    path: str
    query_string: str = ""
    raw_path: str = ""

    @property
    def escaped_path(self) -> str:
        """Path in its on-the-wire form, falling back to ``path``."""
        return self.raw_path or self.path

    @property
    def target(self) -> str:
        """Request target as the client sent it: escaped path plus ``?query``.

        An empty query is indistinguishable from no query in ASGI, so
        ``/a?`` and ``/a`` share the target ``/a``.
        """
        if self.query_string:
            return f"{self.escaped_path}?{self.query_string}"
        return self.escaped_path

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        raw_path = scope.get("raw_path") or b""
        return cls(
            method=scope["method"],
            path=scope["path"],
            query_string=scope.get("query_string", b"").decode("latin-1"),
            # Some servers leave the query on raw_path; it always starts at
            # the first literal "?"
            raw_path=raw_path.decode("latin-1").partition("?")[0],
        )
