"""urlshort CLI — validate and inspect redirect documents.

Entry point registered as ``urlshort`` in ``pyproject.toml``::

    [project.scripts]
    urlshort = "urlshort.cli:main"
"""

import argparse
import logging
import sys

from urlshort.config import ShortenerConfig

_LOG_LEVELS = ("debug", "info", "warning", "error")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``urlshort`` command."""
    parser = argparse.ArgumentParser(
        prog="urlshort",
        description="urlshort — redirect request paths to mapped URLs.",
    )
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default=ShortenerConfig().log_level,
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- urlshort check ---------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a redirect document")
    check_parser.add_argument("file", help="Path to a .yaml, .yml, or .json document")

    # -- urlshort routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the redirects in a document")
    routes_parser.add_argument("file", help="Path to a .yaml, .yml, or .json document")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "check":
        from urlshort.cli._check import run_check

        run_check(args)
    elif args.command == "routes":
        from urlshort.cli._routes import run_routes

        run_routes(args)
