"""Shared fixtures: a built single-page application on disk and in memory."""

from datetime import UTC, datetime

import pytest

from spaserve.stores import MemoryFile, MemoryStore

INDEX_BODY = b"index.html\n"
CSS_BODY = b"body {\n\tdisplay: none;\n}"

MODIFIED = datetime(2024, 5, 17, 9, 30, 0, tzinfo=UTC)


@pytest.fixture
def spa_dir(tmp_path):
    """A directory laid out like a front-end build output."""
    root = tmp_path / "dist"
    root.mkdir()
    (root / "index.html").write_bytes(INDEX_BODY)
    (root / "root-main.css").write_bytes(CSS_BODY)

    css = root / "css"
    css.mkdir()
    (css / "main.css").write_bytes(CSS_BODY)

    js = root / "js"
    js.mkdir()
    (js / "app.js").write_bytes(b"console.log('app');")

    return root


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore(
        {
            "index.html": INDEX_BODY,
            "root-main.css": MemoryFile(CSS_BODY, modified=MODIFIED),
            "css/main.css": MemoryFile(CSS_BODY, modified=MODIFIED),
            "js/app.js": MemoryFile(b"console.log('app');", modified=MODIFIED),
            "docs/guide/index.html": b"<h1>nested</h1>",
        },
        record=True,
    )
