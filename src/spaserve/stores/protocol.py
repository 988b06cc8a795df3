"""Asset store protocol.

An asset store is anything that can open a slash-separated, root-relative
name and hand back a handle::

    with store.open("css/main.css") as handle:
        info = handle.stat()
        data = handle.reader().read()

No base class required for stores; the router checks the shape, not the
lineage. Failures are reported with the built-in ``OSError`` family:

- ``FileNotFoundError`` — nothing under that name
- ``PermissionError`` — the store refuses access
- any other ``OSError`` — the store failed
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from types import TracebackType
from typing import BinaryIO, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class AssetInfo:
    """What a handle knows about its entry.

    ``modified`` is ``None`` when the store cannot tell (bundled
    resources inside an archive, for instance).
    """

    is_dir: bool
    modified: datetime | None = None


@runtime_checkable
class AssetHandle(Protocol):
    """An opened store entry. Closed exactly once, on every exit path.

    Concrete handles subclass this to inherit the context manager
    methods and only implement ``stat``, ``reader`` and ``close``.
    """

    def stat(self) -> AssetInfo: ...

    def reader(self) -> BinaryIO:
        """Return the entry's byte stream.

        Random access is advertised through ``reader().seekable()``.
        Raises ``IsADirectoryError`` for directory entries.
        """
        ...

    def close(self) -> None: ...

    def __enter__(self) -> AssetHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


@runtime_checkable
class AssetStore(Protocol):
    """A hierarchical, read-only byte store."""

    def open(self, name: str) -> AssetHandle: ...


def read_asset(store: AssetStore, name: str) -> bytes:
    """Read the full content of *name* from *store*.

    Raises ``IsADirectoryError`` when *name* is a directory, and whatever
    ``OSError`` the store raises otherwise.
    """
    with store.open(name) as handle:
        if handle.stat().is_dir:
            raise IsADirectoryError(name)
        return handle.reader().read()
