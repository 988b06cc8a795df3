"""spaserve — serve a single-page application with client-side routing.

Static assets come from an asset store; every path that names nothing
gets the entry document, so the browser-side router can handle it.

Basic usage::

    from spaserve import SPA

    app = SPA("./dist")  # any ASGI server can run this

    app.run()

Bundled assets::

    from spaserve import SPA
    from spaserve.stores import PackageStore

    app = SPA(PackageStore("myproject", "frontend/dist"))
"""

__version__ = "0.1.0"
__all__ = [
    "BadRequest",
    "ConfigurationError",
    "Forbidden",
    "HTTPError",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "SPA",
    "SPAConfig",
    "SPARouter",
    "SpaServeError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import spaserve`` fast while providing a clean top-level API.
    """
    if name == "SPA":
        from spaserve.app import SPA

        return SPA

    if name == "SPAConfig":
        from spaserve.config import SPAConfig

        return SPAConfig

    if name == "SPARouter":
        from spaserve.router import SPARouter

        return SPARouter

    if name == "Request":
        from spaserve.http.request import Request

        return Request

    if name == "Response":
        from spaserve.http.response import Response

        return Response

    if name in ("Middleware", "Next"):
        from spaserve.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in (
        "BadRequest",
        "ConfigurationError",
        "Forbidden",
        "HTTPError",
        "NotFound",
        "SpaServeError",
    ):
        from spaserve import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
