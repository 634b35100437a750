"""urlshort — redirect request paths to mapped URLs.

Maps exact request targets to destination URLs and hands every other
request to a fallback handler. The mapping comes from a dict or from a
YAML / JSON document of ``{path, url}`` records.

Basic usage::

    from urlshort import App, map_handler, not_found, yaml_handler

    handler = map_handler(
        {"/urlshort-godoc": "https://godoc.org/github.com/gophercises/urlshort"},
        fallback=not_found,
    )
    handler = yaml_handler(Path("redirects.yaml").read_bytes(), fallback=handler)

    app = App(handler)  # host with any ASGI server
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "ConfigurationError",
    "Handler",
    "MapHandler",
    "Middleware",
    "Next",
    "ParseError",
    "Redirect",
    "RedirectEntry",
    "RedirectMiddleware",
    "Request",
    "Response",
    "ShortenerConfig",
    "UrlshortError",
    "json_handler",
    "map_handler",
    "not_found",
    "parse_json",
    "parse_yaml",
    "yaml_handler",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "App": "urlshort.app",
    "ConfigurationError": "urlshort.errors",
    "Handler": "urlshort.handlers",
    "MapHandler": "urlshort.handlers",
    "Middleware": "urlshort.middleware",
    "Next": "urlshort.middleware",
    "ParseError": "urlshort.errors",
    "Redirect": "urlshort.http.response",
    "RedirectEntry": "urlshort.parsing",
    "RedirectMiddleware": "urlshort.middleware",
    "Request": "urlshort.http.request",
    "Response": "urlshort.http.response",
    "ShortenerConfig": "urlshort.config",
    "UrlshortError": "urlshort.errors",
    "json_handler": "urlshort.handlers",
    "map_handler": "urlshort.handlers",
    "not_found": "urlshort.handlers",
    "parse_json": "urlshort.parsing",
    "parse_yaml": "urlshort.parsing",
    "yaml_handler": "urlshort.handlers",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import urlshort`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
