"""Immutable HTTP request.

Frozen metadata only. The router never reads a request body, so the
request carries no receive channel.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from spaserve.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the decoded request path with any mount prefix already
    removed, ``query_string`` the raw query exactly as received.
    Transformations such as :meth:`without_headers` return a new
    ``Request``.
    """

    method: str
    path: str
    headers: Headers
    query_string: str = ""
    root_path: str = ""
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    @property
    def url(self) -> str:
        """Request path plus query string."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    def without_headers(self, *names: str) -> Request:
        """Return a copy of this request with the named headers removed."""
        return replace(self, headers=self.headers.without(*names))

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope.

        Strips ``root_path`` from ``path`` when the server left it in,
        so routing sees the path relative to the mount point.
        """
        root_path = scope.get("root_path", "")
        path = scope["path"]
        if root_path and path.startswith(root_path):
            path = path[len(root_path) :]
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=path,
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b"").decode("latin-1"),
            root_path=root_path,
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
        )
