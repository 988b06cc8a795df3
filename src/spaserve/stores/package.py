"""Asset store over resources bundled in an installed package.

Lets a project ship its built front-end inside a wheel and serve it
without knowing where (or whether) it landed on disk::

    store = PackageStore("myproject", "frontend/dist")

Uses ``importlib.resources``. Modification times are reported when the
resource is a real file; inside a zip archive they are unknown and no
``Last-Modified`` header is sent.
"""

from datetime import UTC, datetime
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import BinaryIO

from spaserve.stores.protocol import AssetHandle, AssetInfo


class ResourceHandle(AssetHandle):
    __slots__ = ("_file", "_resource")

    def __init__(self, resource: Traversable) -> None:
        self._resource = resource
        self._file: BinaryIO | None = None

    def stat(self) -> AssetInfo:
        if self._resource.is_dir():
            return AssetInfo(is_dir=True)
        if isinstance(self._resource, Path):
            st = self._resource.stat()
            return AssetInfo(
                is_dir=False,
                modified=datetime.fromtimestamp(st.st_mtime, tz=UTC),
            )
        return AssetInfo(is_dir=False)

    def reader(self) -> BinaryIO:
        if self._resource.is_dir():
            raise IsADirectoryError(self._resource.name)
        if self._file is None:
            self._file = self._resource.open("rb")  # type: ignore[assignment]
        return self._file  # type: ignore[return-value]

    def close(self) -> None:
        if self._file is not None:
            self._file.close()


class PackageStore:
    """Asset store rooted at *directory* inside *package*."""

    __slots__ = ("_root",)

    def __init__(self, package: str, directory: str = "") -> None:
        root = files(package)
        for part in directory.strip("/").split("/"):
            if part:
                root = root.joinpath(part)
        self._root = root

    def open(self, name: str) -> ResourceHandle:
        resource = self._root
        for part in name.split("/"):
            if part:
                resource = resource.joinpath(part)
        if not (resource.is_file() or resource.is_dir()):
            raise FileNotFoundError(name)
        return ResourceHandle(resource)

    def __repr__(self) -> str:
        return f"PackageStore({self._root!r})"
