from __future__ import annotations

from .base import AssetLoader, parse_locale_filename
from .filesystem import DirectoryAssetLoader
from .memory import MemoryAssetLoader
from .package import PackageAssetLoader
from .remote import RemoteAssetLoader

__all__ = [
    "AssetLoader",
    "DirectoryAssetLoader",
    "MemoryAssetLoader",
    "PackageAssetLoader",
    "RemoteAssetLoader",
    "parse_locale_filename",
]
