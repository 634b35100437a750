"""HTTP response and the redirect that renders into one.

``with_header`` returns a new Response; nothing is mutated in place.
"""

import html
from dataclasses import dataclass, replace
from http import HTTPStatus

# Methods whose redirect responses carry a short HTML body
_BODY_METHODS = frozenset({"GET", "HEAD"})


def _reason(status: int) -> str:
    """Reason phrase for *status*; unregistered codes get a generic one."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Redirect"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body and status, then chain ``.with_header()``
    calls to add headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or None."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    @property
    def location(self) -> str | None:
        """The ``Location`` header, set on redirects."""
        return self.header("location")

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


@dataclass(frozen=True, slots=True)
class Redirect:
    """A redirect to ``url``, rendered into a ``Response`` on demand."""

    url: str
    status: int = 302

    def to_response(self, method: str = "GET") -> Response:
        """Build the redirect response for a request with *method*.

        GET and HEAD get a one-line HTML body linking to the target so
        clients that ignore ``Location`` still have somewhere to go.
        """
        body = ""
        if method.upper() in _BODY_METHODS:
            body = f'<a href="{html.escape(self.url)}">{_reason(self.status)}</a>.\n'
        return Response(body=body, status=self.status).with_header("Location", self.url)
