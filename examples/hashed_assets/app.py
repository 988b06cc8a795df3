"""Hashed Assets — long-lived caching for fingerprinted build output.

A typical bundler writes ``assets/<name>.<hash>.<ext>`` files that never
change once published, plus an ``index.html`` that points at them.
Demonstrates:
- asset_headers (immutable Cache-Control on every static asset)
- the entry document staying uncacheable regardless
- a function middleware that refuses dotfiles with 404

Run:
    cd examples/hashed_assets && python app.py
"""

from pathlib import Path

from spaserve import SPA, NotFound, Request, Response, SPAConfig
from spaserve.middleware.protocol import Next

DIST = Path(__file__).parent / "dist"

app = SPA(
    DIST,
    config=SPAConfig(
        asset_headers=(("Cache-Control", "public, max-age=31536000, immutable"),),
    ),
)


async def block_dotfiles(request: Request, next: Next) -> Response:
    """Never expose ``.env``, ``.git`` and friends, even if they were deployed."""
    if any(part.startswith(".") and part not in (".", "..") for part in request.path.split("/")):
        raise NotFound
    return await next(request)


app.add_middleware(block_dotfiles)


if __name__ == "__main__":
    app.run()
