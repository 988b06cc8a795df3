"""Tests for the hashed assets example."""

from spaserve.testing import TestClient


def _header(response, name: str) -> str | None:
    return dict(response.headers).get(name)


class TestHashedAssets:
    async def test_index_is_not_cached(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/")
        assert response.status == 200
        assert b'<div id="app">' in response.body
        assert _header(response, "cache-control").startswith("no-cache")

    async def test_assets_are_immutable(self, example_app) -> None:
        async with TestClient(example_app) as client:
            script = await client.get("/assets/app.8b2e4d.js")
            style = await client.get("/assets/app.3f9a1c.css")
        assert script.status == 200
        assert script.content_type == "text/javascript; charset=utf-8"
        assert _header(script, "cache-control") == "public, max-age=31536000, immutable"
        assert style.content_type == "text/css; charset=utf-8"

    async def test_client_route(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/settings/profile")
        assert response.status == 200
        assert b"app.8b2e4d.js" in response.body

    async def test_dotfiles_refused(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/.env")
        assert response.status == 404
        assert response.text == "Not Found\n"
