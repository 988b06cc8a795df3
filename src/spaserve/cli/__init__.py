"""spaserve CLI — serve a built single-page application from a directory.

Entry point registered as ``spaserve`` in ``pyproject.toml``::

    [project.scripts]
    spaserve = "spaserve.cli:main"
"""

import argparse
import sys

from spaserve.config import LOG_LEVELS


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``spaserve`` command."""
    parser = argparse.ArgumentParser(
        prog="spaserve",
        description="spaserve — serve a single-page application with client-side routing.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- spaserve run -----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve a directory")
    run_parser.add_argument("directory", help="Directory holding the built application")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--index",
        default=None,
        help="Entry document name (default: index.html)",
    )
    run_parser.add_argument(
        "--asset-header",
        action="append",
        default=[],
        metavar="NAME:VALUE",
        help="Header added to every static asset response (repeatable)",
    )
    run_parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Serve symlinks that point outside the directory",
    )
    run_parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on file changes (development)",
    )
    run_parser.add_argument(
        "--log-level",
        default="info",
        choices=LOG_LEVELS,
        help="Logging level",
    )

    # -- spaserve check ---------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Verify a directory can be served")
    check_parser.add_argument("directory", help="Directory holding the built application")
    check_parser.add_argument(
        "--index",
        default="index.html",
        help="Entry document name (default: index.html)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from spaserve.cli._run import run_server

        run_server(args)
    elif args.command == "check":
        from spaserve.cli._check import run_check

        run_check(args)
