"""Single-page application router.

Decides, for one request path, between four outcomes:

- the path names the entry document -> redirect to ``./``
- the path is the root, a directory, or misses the store -> entry document
- the path is a regular asset -> serve it with normal caching
- the path is unusable or the store fails -> error status

The entry document goes out with no-cache and security headers and a
fixed epoch modification time. Assets go out untouched so that the store
or the operator decides how they are cached.

Usage::

    router = SPARouter(DirectoryStore("./dist"))
    response = router.respond(request)
"""

import io
import logging
import posixpath
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import PurePosixPath
from types import MappingProxyType

from spaserve.content import EPOCH, http_date, open_byte_source, serve_content, serve_error
from spaserve.dispositions import Disposition, Redirect, ServeAsset, ServeDocument, ServeError
from spaserve.http.request import Request
from spaserve.http.response import Response
from spaserve.stores.protocol import AssetStore, read_asset

logger = logging.getLogger("spaserve.router")

INDEX_PAGE = "index.html"

# From https://github.com/mytrile/nocache
NO_CACHE_HEADERS = MappingProxyType(
    {
        "Expires": http_date(EPOCH),
        "Cache-Control": "no-cache, no-store, no-transform, must-revalidate, private, max-age=0",
        "Pragma": "no-cache",
        "X-Accel-Expires": "0",
    }
)

SECURITY_HEADERS = MappingProxyType(
    {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Content-Security-Policy": "default-src 'self'",
    }
)

# Client validators removed before the entry document is served.
CONDITIONAL_HEADERS = (
    "ETag",
    "If-Modified-Since",
    "If-Match",
    "If-None-Match",
    "If-Range",
    "If-Unmodified-Since",
)


def normalize_path(path: str) -> str:
    """Return *path* as a clean absolute path.

    Ensures a single leading slash, then resolves ``.``, ``..`` and
    repeated separators lexically. ``..`` never climbs above ``/``.
    Idempotent, and never touches the store.
    """
    return posixpath.normpath("/" + path.lstrip("/"))


def is_local(name: str) -> bool:
    """True if *name* is a relative reference that stays below the root."""
    if not name or "\x00" in name:
        return False
    parts = PurePosixPath(name)
    return not parts.is_absolute() and ".." not in parts.parts


class SPARouter:
    """Routes requests to an asset store, falling back to the entry document.

    Stateless across requests: everything held here is fixed at
    construction, so one router may serve any number of concurrent
    requests.
    """

    __slots__ = ("_asset_headers", "_index", "_store")

    def __init__(
        self,
        store: AssetStore,
        *,
        index: str = INDEX_PAGE,
        asset_headers: Iterable[tuple[str, str]] = (),
    ) -> None:
        self._store = store
        self._index = index
        self._asset_headers = tuple(asset_headers)

    @property
    def store(self) -> AssetStore:
        return self._store

    @property
    def index(self) -> str:
        return self._index

    def respond(self, request: Request) -> Response:
        """Decide and render the response for *request*.

        Blocking: store I/O happens on the calling thread.
        """
        with self.resolve(request.path, request.query_string) as disposition:
            logger.debug("%s %s -> %s", request.method, request.url, type(disposition).__name__)
            return self.render(disposition, request)

    @contextmanager
    def resolve(self, path: str, query_string: str = "") -> Iterator[Disposition]:
        """Classify *path* and yield its disposition.

        Any store handle opened for the decision stays open for the
        duration of the ``with`` block and is closed on exit, whether the
        block finishes or raises.
        """
        upath = normalize_path(path)

        # Redirect .../index.html to .../ with a relative Location, so the
        # redirect stays correct when mounted under a prefix. A trailing
        # slash is left alone: "./" would resolve back to the same path.
        if (
            upath != "/"
            and not path.endswith("/")
            and posixpath.basename(upath) == self._index
        ):
            location = f"./?{query_string}" if query_string else "./"
            yield Redirect(location)
            return

        if upath == "/":
            yield self._entry_document()
            return

        name = upath.removeprefix("/")
        if not is_local(name):
            yield ServeError(400, "400 Bad Request")
            return

        try:
            handle = self._store.open(name)
        except FileNotFoundError:
            yield self._entry_document()
            return
        except PermissionError:
            yield ServeError(403, "403 Forbidden")
            return
        except OSError:
            logger.exception("asset store failed to open %r", name)
            yield ServeError(500, "500 Internal Server Error")
            return

        with handle:
            disposition: Disposition
            try:
                info = handle.stat()
                if info.is_dir:
                    # Never list directories.
                    disposition = self._entry_document()
                else:
                    disposition = ServeAsset(
                        name=posixpath.basename(upath),
                        source=open_byte_source(handle),
                        modified=info.modified,
                    )
            except OSError:
                logger.exception("cannot read asset %r", name)
                disposition = ServeError(500, "500 Internal Server Error")
            yield disposition

    def render(self, disposition: Disposition, request: Request) -> Response:
        """Turn *disposition* into a ``Response``."""
        if isinstance(disposition, Redirect):
            return Response(status=disposition.status, content_type=None).with_header(
                "Location", disposition.location
            )

        if isinstance(disposition, ServeDocument):
            # A validator cached for some earlier asset must not turn the
            # entry document into a 304.
            return serve_content(
                request.without_headers(*CONDITIONAL_HEADERS),
                self._index,
                disposition.modified,
                io.BytesIO(disposition.body),
                headers=(*NO_CACHE_HEADERS.items(), *SECURITY_HEADERS.items()),
            )

        if isinstance(disposition, ServeAsset):
            return serve_content(
                request,
                disposition.name,
                disposition.modified,
                disposition.source,
                headers=self._asset_headers,
            )

        return serve_error(disposition.status, disposition.text)

    def _entry_document(self) -> ServeDocument | ServeError:
        try:
            body = read_asset(self._store, self._index)
        except OSError as exc:
            logger.warning("entry document %r unavailable: %s", self._index, exc)
            return ServeError(404, "404 Page Not Found")
        return ServeDocument(body)
