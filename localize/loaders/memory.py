from __future__ import annotations

import copy
from typing import Any, Dict, Mapping


class MemoryAssetLoader:
    """Serves documents already held in memory, keyed by locale file stem."""

    source = "memory"

    def __init__(self, documents: Mapping[str, Any]) -> None:
        self.documents = dict(documents)

    async def load(self) -> Dict[str, Any]:
        return copy.deepcopy(self.documents)
