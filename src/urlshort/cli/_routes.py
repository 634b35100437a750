"""``urlshort routes`` — list the redirects in a document.

Prints a table of PATH and URL in the order paths first appear, with
duplicates already resolved to their last URL.
"""

import argparse

from urlshort.cli._load import load_document


def run_routes(args: argparse.Namespace) -> None:
    """Print the path -> URL table for ``args.file``."""
    paths = load_document(args.file)
    if not paths:
        print("No redirects defined.")
        return

    width = max(4, *(len(path) for path in paths))  # "PATH" header
    fmt = f"{{:<{width}}}  {{}}"
    print(fmt.format("PATH", "URL"))
    print("-" * min(width + 2 + max(len(url) for url in paths.values()), 80))
    for path, url in paths.items():
        print(fmt.format(path, url))
