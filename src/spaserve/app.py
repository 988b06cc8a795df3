"""spaserve application class.

Mutable during setup (middleware, lifecycle hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import inspect
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from spaserve._internal.asgi import Receive, Scope, Send
from spaserve.config import SPAConfig
from spaserve.errors import ConfigurationError
from spaserve.middleware.protocol import Middleware
from spaserve.router import SPARouter
from spaserve.server.handler import handle_request
from spaserve.stores.directory import DirectoryStore
from spaserve.stores.protocol import AssetStore


class SPA:
    """A single-page application as an ASGI app.

    Serves static assets from *store* and answers every other path with
    the entry document, so the client-side router can take over::

        from spaserve import SPA

        app = SPA("./dist")

    *store* may be any asset store, or a directory path, which is wrapped
    in a ``DirectoryStore``.

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the middleware chain
        even when several workers deliver their first request at once.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, store: AssetStore | str | Path, *, config: SPAConfig | None = None) -> None:
        self.config = config or SPAConfig()
        self.config.validate()
        if isinstance(store, (str, Path)):
            store = DirectoryStore(store, follow_symlinks=self.config.follow_symlinks)
        self._router = SPARouter(
            store,
            index=self.config.index,
            asset_headers=self.config.asset_headers,
        )
        self._middleware_list: list[Middleware] = []
        self._middleware: tuple[Middleware, ...] = ()
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen = False
        self._freeze_lock = threading.Lock()

    @property
    def router(self) -> SPARouter:
        return self._router

    # -- Setup --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware; the first added runs outermost."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a sync or async function to run at ASGI lifespan startup."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a sync or async function to run at ASGI lifespan shutdown."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start a server for this app.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        self._ensure_frozen()
        logging.getLogger("spaserve").setLevel(self.config.log_level.upper())

        from spaserve.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
            reload_include=self.config.reload_include,
            reload_dirs=self.config.reload_dirs,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run startup hooks. Called by the lifespan protocol and TestClient."""
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def shutdown(self) -> None:
        """Run shutdown hooks. Called by the lifespan protocol and TestClient."""
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._middleware = tuple(self._middleware_list)
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot modify the app after it has started serving requests."
            raise ConfigurationError(msg)
