"""Document loading — reads a redirect file and picks a parser by suffix.

Shared by ``urlshort check`` and ``urlshort routes``.
"""

import sys
from pathlib import Path

from urlshort.errors import ParseError
from urlshort.parsing import parse_json, parse_yaml

_PARSERS = {
    ".yaml": parse_yaml,
    ".yml": parse_yaml,
    ".json": parse_json,
}


def load_document(filename: str) -> dict[str, str]:
    """Read and parse *filename*, exiting with status 1 on any failure."""
    path = Path(filename)
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        known = ", ".join(sorted(_PARSERS))
        print(f"Error: unsupported document type {path.suffix!r} (expected {known})", file=sys.stderr)
        raise SystemExit(1)

    try:
        document = path.read_bytes()
    except OSError as exc:
        print(f"Error: cannot read {filename}: {exc.strerror}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        return parser(document)
    except ParseError as exc:
        print(f"Error: {filename}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
