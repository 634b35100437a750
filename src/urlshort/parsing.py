"""Redirect document parsing.

A redirect document is an ordered sequence of records, each with a
``path`` and a ``url`` string::

    - path: /urlshort
      url: https://github.com/gophercises/urlshort
    - path: /urlshort-final
      url: https://github.com/gophercises/urlshort/tree/solution

``parse_yaml`` and ``parse_json`` decode the document, validate its
shape, and fold the records into a path -> URL dict. Later records win
when a path repeats. Nothing beyond the shape is checked: URLs are not
validated and paths need not start with ``/``.

Parsing is all-or-nothing. Any malformed record raises ``ParseError``
and no mapping is returned.
"""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import yaml

from urlshort.errors import ParseError

logger = logging.getLogger("urlshort.parsing")

_FIELDS = ("path", "url")


@dataclass(frozen=True, slots=True)
class RedirectEntry:
    """One ``{path, url}`` record from a redirect document."""

    path: str
    url: str


def _as_text(document: bytes | str) -> str:
    if isinstance(document, str):
        return document
    try:
        return document.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"document is not valid UTF-8: {exc.reason}"
        raise ParseError(msg) from exc


def parse_entries(records: Any) -> list[RedirectEntry]:
    """Validate decoded records and convert them to ``RedirectEntry``.

    ``records`` is the decoded top-level value. ``None`` (an empty
    document) yields no entries. Extra keys in a record are ignored.

    Raises:
        ParseError: If the top level is not a list, a record is not a
            mapping, or a record lacks a string ``path`` or ``url``.
    """
    if records is None:
        return []
    if not isinstance(records, list):
        msg = f"expected a list of records, got {type(records).__name__}"
        raise ParseError(msg)

    entries: list[RedirectEntry] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            msg = f"record {index}: expected a mapping, got {type(record).__name__}"
            raise ParseError(msg)
        for name in _FIELDS:
            if name not in record:
                msg = f"record {index}: missing required field {name!r}"
                raise ParseError(msg)
            if not isinstance(record[name], str):
                kind = type(record[name]).__name__
                msg = f"record {index}: field {name!r} must be a string, got {kind}"
                raise ParseError(msg)
        entries.append(RedirectEntry(path=record["path"], url=record["url"]))
    return entries


def build_path_map(entries: Iterable[RedirectEntry]) -> dict[str, str]:
    """Fold entries into a path -> URL dict in order; the last entry wins."""
    paths: dict[str, str] = {}
    for entry in entries:
        previous = paths.get(entry.path)
        if previous is not None and previous != entry.url:
            logger.debug("Duplicate path %s: %s replaces %s", entry.path, entry.url, previous)
        paths[entry.path] = entry.url
    return paths


def parse_yaml(document: bytes | str) -> dict[str, str]:
    """Parse a YAML redirect document into a path -> URL dict.

    Raises:
        ParseError: On malformed YAML or a document of the wrong shape.
            ``line`` / ``column`` are set when PyYAML reports a position.
    """
    text = _as_text(document)
    try:
        records = yaml.safe_load(text)
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark
        line = mark.line + 1 if mark is not None else None
        column = mark.column + 1 if mark is not None else None
        raise ParseError(f"invalid YAML: {exc.problem}", line=line, column=column) from exc
    except yaml.YAMLError as exc:
        raise ParseError(f"invalid YAML: {exc}") from exc

    paths = build_path_map(parse_entries(records))
    logger.debug("Parsed %d redirect(s) from YAML", len(paths))
    return paths


def parse_json(document: bytes | str) -> dict[str, str]:
    """Parse a JSON redirect document (an array of objects).

    An empty or whitespace-only document yields an empty dict, matching
    the YAML behaviour.

    Raises:
        ParseError: On malformed JSON or a document of the wrong shape.
    """
    text = _as_text(document)
    if not text.strip():
        return {}
    try:
        records = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"invalid JSON: {exc.msg}", line=exc.lineno, column=exc.colno) from exc

    paths = build_path_map(parse_entries(records))
    logger.debug("Parsed %d redirect(s) from JSON", len(paths))
    return paths
