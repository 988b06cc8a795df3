"""Filesystem-backed asset store.

Serves entries below a root directory. Names are joined onto the root
as given; the router has already rejected anything that is not a local
reference.

Security: symlinks are resolved and the final path is checked against
the root, unless ``follow_symlinks=True`` is passed. An entry that
escapes the root is reported as ``PermissionError``.
"""

import os
import stat as stat_module
from datetime import UTC, datetime
from pathlib import Path
from typing import BinaryIO

from spaserve.stores.protocol import AssetHandle, AssetInfo


class FileHandle(AssetHandle):
    """An open regular file or a directory marker."""

    __slots__ = ("_file", "_path", "_stat")

    def __init__(self, path: Path, st: os.stat_result, file: BinaryIO | None) -> None:
        self._path = path
        self._stat = st
        self._file = file

    def stat(self) -> AssetInfo:
        st = os.fstat(self._file.fileno()) if self._file is not None else self._stat
        return AssetInfo(
            is_dir=stat_module.S_ISDIR(st.st_mode),
            modified=datetime.fromtimestamp(st.st_mtime, tz=UTC),
        )

    def reader(self) -> BinaryIO:
        if self._file is None:
            raise IsADirectoryError(str(self._path))
        return self._file

    def close(self) -> None:
        if self._file is not None:
            self._file.close()


class DirectoryStore:
    """Asset store over a directory on disk.

    Usage::

        store = DirectoryStore("./dist")
        app = SPA(store)
    """

    __slots__ = ("_follow_symlinks", "_root")

    def __init__(self, root: str | Path, *, follow_symlinks: bool = False) -> None:
        self._root = Path(root).resolve()
        self._follow_symlinks = follow_symlinks

    @property
    def root(self) -> Path:
        return self._root

    def open(self, name: str) -> FileHandle:
        path = self._root / name if name else self._root

        if not self._follow_symlinks:
            resolved = path.resolve()
            if not resolved.is_relative_to(self._root):
                msg = f"{name!r} resolves outside the store root"
                raise PermissionError(msg)
            path = resolved

        try:
            st = path.stat()
        except NotADirectoryError as exc:
            # "app.js/extra" names nothing; it is a miss, not a failure.
            raise FileNotFoundError(exc.errno, exc.strerror, str(path)) from exc

        if stat_module.S_ISDIR(st.st_mode):
            return FileHandle(path, st, None)
        return FileHandle(path, st, path.open("rb"))

    def __repr__(self) -> str:
        return f"DirectoryStore({str(self._root)!r})"
