from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Sequence

from ..loaders.base import AssetLoader, parse_locale_filename
from .errors import InvalidInputError, LoadError
from .flatten import JsonMapper, NestedJsonMapper, stringify
from .keys import build_key

if TYPE_CHECKING:
    from ..infra.store import TranslationStore


log = logging.getLogger(__name__)


def loader_name(loader: AssetLoader) -> str:
    return getattr(loader, "source", type(loader).__name__)


def merge_translations(primary: Mapping[str, Any], fallback: Mapping[str, Any]) -> Dict[str, Any]:
    """Shallow merge over flattened keys; primary wins on conflict."""
    return {**fallback, **primary}


def namespace_documents(documents: Mapping[str, Any], mapper: JsonMapper) -> Dict[str, Any]:
    """Flatten each locale document and prefix its keys with the file's locale.

    A document that is not a mapping is skipped with a warning; the other
    documents from the same loader are kept. Every leaf must be storable,
    otherwise InvalidInputError fails the whole batch.
    """
    if not isinstance(documents, Mapping):
        raise InvalidInputError(f"Loader returned {type(documents).__name__}, expected a mapping")
    result: Dict[str, Any] = {}
    for name, tree in documents.items():
        if not isinstance(tree, Mapping):
            log.warning("Skipping locale document %s: expected a mapping, got %s", name, type(tree).__name__)
            continue
        loc = parse_locale_filename(name)
        for key, value in mapper.flatten_json(tree).items():
            stringify(value)
            result[build_key(key, loc.language_code, loc.country_code)] = value
    return result


class TranslationIngestor:
    """Loads the primary source plus the first working fallback and persists the merge."""

    def __init__(self, store: Optional["TranslationStore"] = None, mapper: Optional[JsonMapper] = None) -> None:
        self.store = store
        self.mapper = mapper or NestedJsonMapper()

    async def _try_load(self, loader: AssetLoader, role: str) -> Optional[Dict[str, Any]]:
        name = loader_name(loader)
        try:
            documents = await loader.load()
            result = namespace_documents(documents, self.mapper)
        except (LoadError, InvalidInputError) as e:
            log.warning("%s asset loader %s failed: %s", role, name, e)
            return None
        except Exception:
            # Loader implementations are third-party; any failure means "no data"
            log.exception("%s asset loader %s raised unexpectedly", role, name)
            return None
        log.info("%s asset loader %s succeeded (%d keys)", role, name, len(result))
        return result

    async def collect(self, primary: AssetLoader, fallbacks: Sequence[AssetLoader] = ()) -> Dict[str, Any]:
        primary_result = await self._try_load(primary, "Primary") or {}

        fallback_result: Dict[str, Any] = {}
        for loader in fallbacks:
            loaded = await self._try_load(loader, "Fallback")
            if loaded is not None:
                fallback_result = loaded
                break

        return merge_translations(primary_result, fallback_result)

    async def ingest(self, primary: AssetLoader, fallbacks: Sequence[AssetLoader] = ()) -> Dict[str, Any]:
        final = await self.collect(primary, fallbacks)
        if not final:
            log.warning("No translations loaded from any source")
        if self.store is not None and final:
            written = await self.store.write_map({k: stringify(v) for k, v in final.items()})
            log.info("Persisted %d translation entries", written)
        return final
