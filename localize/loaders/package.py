from __future__ import annotations

import logging
from importlib import resources
from typing import Any, Dict

from ..core.errors import LoadError
from .base import LOCALE_FILE_SUFFIX, decode_document, locale_stem


log = logging.getLogger(__name__)


class PackageAssetLoader:
    """Loads JSON locale files bundled inside an importable package."""

    def __init__(self, package: str = "localize.locales", directory: str = "") -> None:
        self.package = package
        self.directory = directory

    @property
    def source(self) -> str:
        return f"package:{self.package}/{self.directory}".rstrip("/")

    async def load(self) -> Dict[str, Any]:
        try:
            # Works for wheels/zipimport as well
            root = resources.files(self.package)
            if self.directory:
                root = root.joinpath(self.directory)
            entries = [e for e in root.iterdir() if e.is_file() and e.name.endswith(LOCALE_FILE_SUFFIX)]
        except (ModuleNotFoundError, FileNotFoundError, NotADirectoryError) as e:
            raise LoadError(self.source, f"resources unavailable: {e}") from e

        result: Dict[str, Any] = {}
        for entry in sorted(entries, key=lambda e: e.name):
            try:
                payload = entry.read_text(encoding="utf-8")
            except OSError as e:
                raise LoadError(self.source, f"cannot read {entry.name}: {e}", {"file": entry.name}) from e
            result[locale_stem(entry.name)] = decode_document(self.source, entry.name, payload)
        log.debug("Loaded %d locale files from %s", len(result), self.source)
        return result
