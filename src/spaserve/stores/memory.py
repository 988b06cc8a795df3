"""In-memory asset store.

A test double and a convenient store for generated assets. Directories
are implied by names: ``{"css/main.css": b"..."}`` makes ``css`` a
directory. The empty name is the root directory.
"""

import io
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO

from spaserve.stores.protocol import AssetHandle, AssetInfo


@dataclass(frozen=True, slots=True)
class MemoryFile:
    """An in-memory entry.

    ``seekable=False`` hands out a forward-only stream, the way some
    archive or network-backed stores do.
    """

    data: bytes
    modified: datetime | None = None
    seekable: bool = True


class _ForwardOnlyReader(io.RawIOBase):
    """A readable stream that refuses random access."""

    def __init__(self, data: bytes) -> None:
        self._buffer = io.BytesIO(data)

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def readinto(self, b: bytearray) -> int:  # type: ignore[override]
        return self._buffer.readinto(b)


class MemoryHandle(AssetHandle):
    __slots__ = ("_closed", "_entry", "_name", "_stream")

    def __init__(self, name: str, entry: MemoryFile | None) -> None:
        self._name = name
        self._entry = entry
        self._stream: BinaryIO | None = None
        self._closed = False

    def stat(self) -> AssetInfo:
        if self._entry is None:
            return AssetInfo(is_dir=True)
        return AssetInfo(is_dir=False, modified=self._entry.modified)

    def reader(self) -> BinaryIO:
        if self._entry is None:
            raise IsADirectoryError(self._name)
        if self._stream is None:
            if self._entry.seekable:
                self._stream = io.BytesIO(self._entry.data)
            else:
                self._stream = io.BufferedReader(_ForwardOnlyReader(self._entry.data))  # type: ignore[assignment]
        return self._stream  # type: ignore[return-value]

    def close(self) -> None:
        self._closed = True
        if self._stream is not None:
            self._stream.close()

    @property
    def closed(self) -> bool:
        return self._closed


class MemoryStore:
    """Asset store over a mapping of names to content.

    Usage::

        store = MemoryStore(
            {"index.html": b"<h1>app</h1>", "js/app.js": b"boot()"},
            errors={"secret.txt": PermissionError("secret.txt")},
        )

    ``errors`` maps names to exceptions raised when that name is opened.
    With ``record=True`` every handle handed out is remembered in
    ``opened`` so tests can check that it was closed. Otherwise nothing
    is kept.
    """

    __slots__ = ("_dirs", "_errors", "_files", "_record", "opened")

    def __init__(
        self,
        files: Mapping[str, bytes | MemoryFile],
        *,
        errors: Mapping[str, OSError] | None = None,
        record: bool = False,
    ) -> None:
        self._files = {
            name.strip("/"): entry if isinstance(entry, MemoryFile) else MemoryFile(entry)
            for name, entry in files.items()
        }
        self._errors = dict(errors or {})
        self._dirs = {""}
        for name in self._files:
            parts = name.split("/")
            for depth in range(1, len(parts)):
                self._dirs.add("/".join(parts[:depth]))
        self._record = record
        self.opened: list[MemoryHandle] = []

    def open(self, name: str) -> MemoryHandle:
        if name in self._errors:
            raise self._errors[name]
        if name in self._files:
            handle = MemoryHandle(name, self._files[name])
        elif name in self._dirs:
            handle = MemoryHandle(name, None)
        else:
            raise FileNotFoundError(name)
        if self._record:
            self.opened.append(handle)
        return handle
