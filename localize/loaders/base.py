from __future__ import annotations

import json
from pathlib import PurePosixPath
from typing import Any, Dict, Protocol, runtime_checkable

from ..core.errors import InvalidInputError, LoadError
from ..core.locale import Locale


LOCALE_FILE_SUFFIX = ".json"


@runtime_checkable
class AssetLoader(Protocol):
    """A translation source.

    ``load()`` returns raw, not yet flattened, content keyed by locale file
    stem, e.g. ``{"en": {...}, "en-US-extra": {...}}``. Sources that cannot
    be read raise :class:`LoadError`.
    """

    async def load(self) -> Dict[str, Any]: ...


def parse_locale_filename(name: str) -> Locale:
    """Derive the locale from a file name such as ``en-US-extra.json``.

    The stem is split on ``-``: the first segment is the language code and,
    only when there are more than two segments, the second one is the country
    code. ``en-US.json`` therefore has no country.
    """
    parts = locale_stem(name).split("-")
    if not parts[0]:
        raise InvalidInputError(f"Cannot derive a language code from {name!r}")
    country = parts[1] if len(parts) > 2 else None
    return Locale(parts[0], country or None)


def locale_stem(name: str) -> str:
    return PurePosixPath(name.replace("\\", "/")).name.split(".")[0]


def decode_document(source: str, name: str, payload: str | bytes) -> Any:
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LoadError(source, f"{name} is not valid JSON: {e}", {"file": name}) from e
