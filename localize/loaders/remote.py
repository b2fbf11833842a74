from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import httpx

from ..core.errors import LoadError
from .base import decode_document, locale_stem


log = logging.getLogger(__name__)


class RemoteAssetLoader:
    """Fetches locale files over HTTP(S): ``<base_url>/<file>`` for each file."""

    def __init__(
        self,
        base_url: str,
        files: Sequence[str],
        timeout: float = 10.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.files = list(files)
        self.timeout = timeout
        self.headers = headers or {}
        self.transport = transport

    @property
    def source(self) -> str:
        return f"remote:{self.base_url}"

    async def load(self) -> Dict[str, Any]:
        if not self.files:
            raise LoadError(self.source, "no locale files configured")
        result: Dict[str, Any] = {}
        async with httpx.AsyncClient(
            timeout=self.timeout, headers=self.headers, transport=self.transport
        ) as client:
            for name in self.files:
                url = f"{self.base_url}/{name.lstrip('/')}"
                try:
                    response = await client.get(url)
                    response.raise_for_status()
                except httpx.HTTPError as e:
                    raise LoadError(self.source, f"cannot fetch {url}: {e}", {"file": name}) from e
                result[locale_stem(name)] = decode_document(self.source, name, response.content)
        log.debug("Fetched %d locale files from %s", len(result), self.source)
        return result
