"""Asset stores — Protocol-based, no inheritance required.

An asset store is any object with ``open(name) -> AssetHandle`` that
reports failures through the built-in ``OSError`` family.

Built-in stores:
    DirectoryStore -- Files below a directory on disk
    PackageStore -- Resources bundled in an installed package
    MemoryStore -- In-memory mapping, for tests and generated assets
"""

from spaserve.stores.directory import DirectoryStore
from spaserve.stores.memory import MemoryFile, MemoryStore
from spaserve.stores.package import PackageStore
from spaserve.stores.protocol import AssetHandle, AssetInfo, AssetStore, read_asset

__all__ = [
    "AssetHandle",
    "AssetInfo",
    "AssetStore",
    "DirectoryStore",
    "MemoryFile",
    "MemoryStore",
    "PackageStore",
    "read_asset",
]
