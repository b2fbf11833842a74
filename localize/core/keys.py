"""Storage key construction.

Translation records are stored under composite keys::

    <lang>:<logical key>              no country
    <lang>|<country>:<logical key>    country given (possibly "")

Language and country are percent-encoded, so neither ``:`` nor ``|`` can
appear inside them and the first ``:`` always ends the locale prefix.
Settings records use the reserved ``@`` names below, which never contain
``:`` and so never clash with a translation key.
"""

from __future__ import annotations

import json
from typing import Iterable, List, Optional
from urllib.parse import quote

from .errors import InvalidInputError
from .locale import Locale


LANGUAGE_CODE = "@languageCode"
COUNTRY_CODE = "@countryCode"
IS_RTL = "@isRTL"
LOCALES = "@locales"
STORAGE_PATH = "@storagePath"

SETTINGS_KEYS = frozenset({LANGUAGE_CODE, COUNTRY_CODE, IS_RTL, LOCALES, STORAGE_PATH})


def _enc(part: str) -> str:
    return quote(part, safe="")


def build_prefix(language_code: str, country_code: Optional[str] = None) -> str:
    if not language_code:
        raise InvalidInputError("language_code must be non-empty")
    if country_code is None:
        return _enc(language_code)
    return f"{_enc(language_code)}|{_enc(country_code)}"


def build_key(logical_key: str, language_code: str, country_code: Optional[str] = None) -> str:
    return f"{build_prefix(language_code, country_code)}:{logical_key}"


def active_key(logical_key: str, language_code: str, stored_country: Optional[str]) -> str:
    # Persisted country "" means the active locale has no country
    return build_key(logical_key, language_code, stored_country or None)


def is_translation_key(key: str) -> bool:
    return ":" in key and key not in SETTINGS_KEYS


def encode_locales(locales: Iterable[Locale]) -> str:
    return json.dumps([[loc.language_code, loc.country_code] for loc in locales])


def decode_locales(raw: str) -> List[Locale]:
    try:
        items = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Stored locale list is not valid JSON: {e}") from e
    if not isinstance(items, list):
        raise InvalidInputError("Stored locale list must be a JSON array")
    out: List[Locale] = []
    for item in items:
        if isinstance(item, str):
            out.append(Locale(item))
        elif isinstance(item, list) and len(item) == 2 and item[0]:
            out.append(Locale(item[0], item[1] or None))
        else:
            raise InvalidInputError(f"Unreadable stored locale entry: {item!r}")
    return out
