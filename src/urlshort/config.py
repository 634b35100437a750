"""Shortener configuration.

ShortenerConfig is a frozen dataclass: immutable after creation, checked
once at construction, no string-key dict lookups.
"""

from dataclasses import dataclass

from urlshort.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ShortenerConfig:
    """Redirect dispatch configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ShortenerConfig(redirect_status=301, match_query_string=False)
    """

    # Status sent for a matched path (302 Found by default)
    redirect_status: int = 302

    # Look up "/a?x=1" as-is; False strips the query before lookup
    match_query_string: bool = True

    # Used by the CLI to configure the root logger
    log_level: str = "info"

    def __post_init__(self) -> None:
        if not 300 <= self.redirect_status <= 399:
            msg = f"redirect_status must be a 3xx status code, got {self.redirect_status}"
            raise ConfigurationError(msg)
