"""``spaserve run`` — serve a directory.

Builds a SPAConfig from the command-line flags, wraps the directory in a
DirectoryStore-backed SPA, and starts the server.
"""

import argparse
import logging
import sys
from pathlib import Path

from spaserve.app import SPA
from spaserve.config import SPAConfig
from spaserve.errors import ConfigurationError


def parse_header(value: str) -> tuple[str, str]:
    """Split ``"Name: value"`` into a header pair."""
    name, sep, header_value = value.partition(":")
    if not sep or not name.strip():
        msg = f"expected NAME:VALUE, got {value!r}"
        raise ConfigurationError(msg)
    return name.strip(), header_value.strip()


def run_server(args: argparse.Namespace) -> None:
    """Start serving ``args.directory``."""
    directory = Path(args.directory)
    if not directory.is_dir():
        print(f"Error: {directory} is not a directory", file=sys.stderr)
        raise SystemExit(1)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    defaults = SPAConfig()
    try:
        config = SPAConfig(
            host=args.host or defaults.host,
            port=args.port or defaults.port,
            debug=args.reload,
            index=args.index or defaults.index,
            asset_headers=tuple(parse_header(value) for value in args.asset_header),
            follow_symlinks=args.follow_symlinks,
            log_level=args.log_level,
        )
        app = SPA(directory, config=config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from spaserve.server.dev import run_dev_server

    try:
        run_dev_server(
            app,
            config.host,
            config.port,
            reload=config.debug,
            reload_dirs=(str(directory),) if config.debug else (),
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
