"""Server launcher.

Starts a pounce ASGI server with the live SPA object. Single worker;
reload is enabled only when asked for (debug mode).
"""

from __future__ import annotations

import logging

from spaserve.errors import ConfigurationError

logger = logging.getLogger("spaserve.server")


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    reload_include: tuple[str, ...] = (),
    reload_dirs: tuple[str, ...] = (),
) -> None:
    """Start a pounce server with the given app.

    Pounce's ``run()`` takes an import string, but here we hold a live
    ``SPA`` object, so ``pounce.Server`` is used directly with the ASGI
    callable.

    Args:
        app: ASGI callable (SPA instance).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
        reload_include: Extra file extensions to watch when reload is
            active (e.g. ``(".html", ".css")``).
        reload_dirs: Extra directories to watch alongside cwd.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError:
        msg = (
            "spaserve needs the pounce ASGI server to run. "
            "Install with: pip install spaserve[server]"
        )
        raise ConfigurationError(msg) from None

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_include=reload_include,
        reload_dirs=reload_dirs,
    )
    logger.info("serving on http://%s:%d", host, port)
    Server(config, app).run()
