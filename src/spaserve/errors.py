"""spaserve exception hierarchy.

Shared across the router, app, handler, and middleware so every module
raises and catches the same types. Asset stores do not use these: they
report failures with the built-in ``OSError`` family, which the router
maps to statuses.
"""

from dataclasses import dataclass


class SpaServeError(Exception):
    """Base for all spaserve-specific errors."""


class ConfigurationError(SpaServeError):
    """Raised when app configuration is invalid.

    Typically raised while building the ``SPA`` app, before any request.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(SpaServeError):
    """An error that maps directly to an HTTP status code.

    Raised by middleware. The ASGI handler catches these and turns
    them into plain-text error responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """400 — the request path cannot address the asset store."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class Forbidden(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """403 — the store refused access to the asset."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — nothing to serve, not even the entry document."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
