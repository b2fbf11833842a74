from __future__ import annotations

import locale as _host_locale
import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from .errors import MissingConfigurationError


log = logging.getLogger(__name__)

# Closed list, not derived from any locale database
RTL_LANGUAGES = frozenset({
    "ar",  # Arabic
    "fa",  # Persian
    "he",  # Hebrew
    "ur",  # Urdu
    "ps",  # Pashto
    "sd",  # Sindhi
})

_DEVICE_SPLIT_RE = re.compile(r"[-_]+")

LocaleSource = Callable[[], str]


@dataclass(frozen=True)
class Locale:
    language_code: str
    country_code: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.language_code:
            raise ValueError("language_code must be non-empty")

    def __str__(self) -> str:
        if self.country_code:
            return f"{self.language_code}-{self.country_code}"
        return self.language_code


class DefaultType(str, Enum):
    DEVICE = "device"
    FIRST_SUPPORTED = "first_supported"

    @classmethod
    def parse(cls, value: "DefaultType | str") -> "DefaultType":
        if isinstance(value, cls):
            return value
        v = str(value).strip().lower().replace("-", "_")
        if v in {"firstsupported", "first"}:
            v = cls.FIRST_SUPPORTED.value
        try:
            return cls(v)
        except ValueError:
            raise ValueError(f"Unknown default type: {value!r}. Use 'device' or 'first_supported'") from None


def is_rtl_language(language_code: str) -> bool:
    return language_code in RTL_LANGUAGES


def system_locale() -> str:
    """Return the host's locale string, e.g. ``en_US`` or ``pt-BR``."""
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = (os.environ.get(var) or "").split(".")[0]
        if value and value not in {"C", "POSIX"}:
            return value
    try:
        name = _host_locale.getlocale()[0]
    except ValueError:
        name = None
    if not name or name in {"C", "POSIX"}:
        return "en"
    return name


def device_language_code(locale_string: str) -> str:
    # en-US, en_US and en all give "en"
    code = _DEVICE_SPLIT_RE.split(locale_string.strip())[0]
    return code or "en"


def resolve_initial_locale(
    persisted: Optional[Locale],
    supported: Sequence[Locale],
    default_type: DefaultType = DefaultType.DEVICE,
    device_locale: LocaleSource = system_locale,
) -> Locale:
    """Pick the starting locale.

    A previously saved choice wins. Otherwise the device language is used when
    ``default_type`` is DEVICE (country is never taken from the device), and
    finally the first supported locale.
    """
    if persisted is not None:
        log.debug("Using persisted locale %s", persisted)
        return persisted
    if DefaultType.parse(default_type) is DefaultType.DEVICE:
        raw = device_locale()
        log.debug("Using device locale %r", raw)
        return Locale(device_language_code(raw))
    if supported:
        return supported[0]
    raise MissingConfigurationError("No supported locales to choose a default from")
