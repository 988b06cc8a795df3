"""Tests for spaserve.http.request — the immutable request."""

from spaserve.http.headers import Headers
from spaserve.http.request import Request


def _scope(**overrides: object) -> dict:
    scope: dict = {
        "type": "http",
        "method": "GET",
        "path": "/css/main.css",
        "query_string": b"v=2",
        "headers": [(b"if-none-match", b'"v1"'), (b"accept", b"text/css")],
        "http_version": "1.1",
        "client": ("10.0.0.1", 51234),
    }
    scope.update(overrides)
    return scope


class TestFromAsgi:
    def test_fields(self) -> None:
        request = Request.from_asgi(_scope())
        assert request.method == "GET"
        assert request.path == "/css/main.css"
        assert request.query_string == "v=2"
        assert request.headers["If-None-Match"] == '"v1"'
        assert request.client == ("10.0.0.1", 51234)
        assert request.root_path == ""

    def test_strips_root_path(self) -> None:
        request = Request.from_asgi(_scope(root_path="/app", path="/app/users/42"))
        assert request.path == "/users/42"
        assert request.root_path == "/app"

    def test_root_path_already_removed(self) -> None:
        request = Request.from_asgi(_scope(root_path="/app", path="/users/42"))
        assert request.path == "/users/42"

    def test_missing_optional_keys(self) -> None:
        request = Request.from_asgi({"type": "http", "method": "HEAD", "path": "/"})
        assert request.query_string == ""
        assert request.client is None
        assert len(request.headers) == 0


class TestRequest:
    def test_url(self) -> None:
        assert Request.from_asgi(_scope()).url == "/css/main.css?v=2"
        assert Request.from_asgi(_scope(query_string=b"")).url == "/css/main.css"

    def test_without_headers(self) -> None:
        request = Request.from_asgi(_scope())
        stripped = request.without_headers("If-None-Match", "ETag")
        assert "if-none-match" not in stripped.headers
        assert stripped.headers["accept"] == "text/css"
        assert "if-none-match" in request.headers
        assert stripped.path == request.path

    def test_defaults(self) -> None:
        request = Request(method="GET", path="/", headers=Headers())
        assert request.http_version == "1.1"
        assert request.url == "/"
