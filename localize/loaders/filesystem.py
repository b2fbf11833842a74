from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict

from ..core.errors import LoadError
from .base import LOCALE_FILE_SUFFIX, decode_document, locale_stem


log = logging.getLogger(__name__)


class DirectoryAssetLoader:
    """Loads ``<lang>[-<country>...].json`` files from a directory on disk."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    @property
    def source(self) -> str:
        return f"dir:{self.directory}"

    async def load(self) -> Dict[str, Any]:
        return await asyncio.to_thread(self._load_sync)

    def _load_sync(self) -> Dict[str, Any]:
        if not self.directory.is_dir():
            raise LoadError(self.source, "directory does not exist")
        result: Dict[str, Any] = {}
        for path in sorted(self.directory.glob(f"*{LOCALE_FILE_SUFFIX}")):
            try:
                payload = path.read_text(encoding="utf-8")
            except OSError as e:
                raise LoadError(self.source, f"cannot read {path.name}: {e}", {"file": path.name}) from e
            result[locale_stem(path.name)] = decode_document(self.source, path.name, payload)
        log.debug("Loaded %d locale files from %s", len(result), self.source)
        return result
