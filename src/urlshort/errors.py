"""urlshort exception hierarchy.

Shared across parsing, handlers, and the ASGI layer so every module
raises and catches the same types.
"""


class UrlshortError(Exception):
    """Base for all urlshort-specific errors."""


class ConfigurationError(UrlshortError):
    """Raised when a ``ShortenerConfig`` value is invalid."""


class ParseError(UrlshortError):
    """A redirect document does not have the expected shape.

    Raised for malformed syntax, a top level that is not a sequence,
    records that are not mappings, and missing or non-string ``path`` /
    ``url`` fields. ``line`` and ``column`` are 1-based when the
    underlying decoder reports a position.
    """

    def __init__(
        self,
        detail: str,
        *,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.detail
        if self.column is None:
            return f"line {self.line}: {self.detail}"
        return f"line {self.line}, column {self.column}: {self.detail}"
