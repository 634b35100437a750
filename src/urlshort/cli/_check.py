"""``urlshort check`` — redirect document validation command.

Parses the document and reports how many redirects it defines.
Exits with code 1 if the document cannot be read or parsed.
"""

import argparse

from urlshort.cli._load import load_document


def run_check(args: argparse.Namespace) -> None:
    """Validate ``args.file`` and print a one-line summary."""
    paths = load_document(args.file)
    noun = "redirect" if len(paths) == 1 else "redirects"
    print(f"{args.file}: OK ({len(paths)} {noun})")
