"""``spaserve check`` — verify that a directory can be served.

Loads the entry document through the same store the server would use
and reports what it found.
"""

import argparse
import sys
from pathlib import Path

from spaserve.stores.directory import DirectoryStore
from spaserve.stores.protocol import read_asset


def run_check(args: argparse.Namespace) -> None:
    """Exit 0 if ``args.directory`` has a readable entry document, 1 otherwise."""
    directory = Path(args.directory)
    if not directory.is_dir():
        print(f"Error: {directory} is not a directory", file=sys.stderr)
        raise SystemExit(1)

    store = DirectoryStore(directory)
    try:
        body = read_asset(store, args.index)
    except OSError as exc:
        print(f"Error: cannot read {args.index} in {directory}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"{directory / args.index}: {len(body)} bytes, ok")
