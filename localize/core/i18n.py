from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ..infra.store import TranslationStore, open_store
from . import keys
from .config import InitOptions
from .errors import InvalidInputError, NotInitializedError
from .ingest import TranslationIngestor
from .locale import Locale, LocaleSource, device_language_code, is_rtl_language, resolve_initial_locale, system_locale


log = logging.getLogger(__name__)

Observer = Callable[[], None]


def missing_translation(key: str) -> str:
    return f"[missing: {key}]"


class LocalizeAndTranslate:
    """Process-local localization context.

    Owned by the application entry point::

        async with LocalizeAndTranslate() as i18n:
            await i18n.init(options)
            title = await i18n.translate("home.title")

    Storage is the only source of truth: every getter reads it.
    """

    def __init__(
        self,
        store: Optional[TranslationStore] = None,
        locale_source: LocaleSource = system_locale,
    ) -> None:
        self._store = store
        self._owns_store = store is None
        self._options: Optional[InitOptions] = None
        self._observers: List[Observer] = []
        self._locale_source = locale_source

    async def __aenter__(self) -> "LocalizeAndTranslate":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    @property
    def store(self) -> TranslationStore:
        if self._store is None:
            raise NotInitializedError("LocalizeAndTranslate.init() has not been awaited")
        return self._store

    # ---------- lifecycle ----------

    async def init(self, options: InitOptions) -> Dict[str, Any]:
        """Open storage, settle the locale and (re)load every translation source.

        Raises MissingConfigurationError when no supported locales are given;
        loader failures are logged and tolerated. Returns the merged mapping
        that was written to storage.
        """
        supported = options.resolve_supported_locales()
        self._options = options
        self._locale_source = options.locale_source

        if self._store is None:
            self._store = await open_store(
                options.storage_path,
                options.storage_backend,
                options.database_url,
            )
            self._owns_store = True

        if options.on_change is not None and options.on_change not in self._observers:
            self._observers.append(options.on_change)

        if options.storage_path is not None:
            await self.set_storage_path(options.storage_path)
        await self.store.write(keys.LOCALES, keys.encode_locales(supported))

        persisted = await self._persisted_locale()
        initial = resolve_initial_locale(
            persisted, supported, options.default_type, self._locale_source
        )
        await self.set_locale(initial)

        final = await self.reload()
        log.info(
            "init | LanguageCode: %s | CountryCode: %s | isRTL: %s",
            await self.get_language_code(),
            await self.get_country_code(),
            await self.is_right_to_left(),
        )
        return final

    async def reload(self) -> Dict[str, Any]:
        """Re-run ingestion with the loaders given to init()."""
        if self._options is None:
            raise NotInitializedError("LocalizeAndTranslate.init() has not been awaited")
        ingestor = TranslationIngestor(self.store, self._options.json_mapper)
        return await ingestor.ingest(self._options.asset_loader, self._options.asset_loaders_extra)

    async def close(self) -> None:
        if self._store is not None and self._owns_store:
            await self._store.dispose()
            self._store = None
        self._observers.clear()
        self._options = None

    # ---------- observers ----------

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        self._observers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Observer) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._observers):
            try:
                callback()
            except Exception:
                log.exception("Locale change observer %r failed", callback)

    # ---------- locale ----------

    async def set_locale(self, locale: Locale) -> None:
        country = locale.country_code
        if country is None or country == "null":
            country = ""
        await self.store.write(keys.LANGUAGE_CODE, locale.language_code)
        await self.store.write(keys.COUNTRY_CODE, country)
        await self.store.write(keys.IS_RTL, "true" if is_rtl_language(locale.language_code) else "false")
        self._notify()

    async def set_language_code(self, language_code: str) -> None:
        await self.set_locale(Locale(language_code))

    async def set_storage_path(self, path: str) -> None:
        await self.store.write(keys.STORAGE_PATH, path)

    async def _persisted_locale(self) -> Optional[Locale]:
        language = await self.store.read_nullable(keys.LANGUAGE_CODE)
        if not language:
            return None
        country = await self.store.read_nullable(keys.COUNTRY_CODE)
        return Locale(language, country or None)

    async def get_language_code(self) -> str:
        language = await self.store.read_nullable(keys.LANGUAGE_CODE)
        if language is None:
            return device_language_code(self._locale_source())
        return language

    async def get_country_code(self) -> Optional[str]:
        return await self.store.read_nullable(keys.COUNTRY_CODE)

    async def get_locale(self) -> Locale:
        return Locale(await self.get_language_code(), (await self.get_country_code()) or None)

    async def is_right_to_left(self) -> bool:
        return await self.store.read(keys.IS_RTL, default="false") == "true"

    async def get_supported_locales(self) -> List[Locale]:
        raw = await self.store.read_nullable(keys.LOCALES)
        if raw is not None:
            try:
                return keys.decode_locales(raw)
            except InvalidInputError as e:
                log.warning("Ignoring unreadable stored locale list: %s", e)
        return [Locale(device_language_code(self._locale_source()))]

    # ---------- lookup ----------

    async def translate(self, key: str, default_value: Optional[str] = None) -> str:
        language = await self.get_language_code()
        country = await self.get_country_code()

        text = await self.store.read_nullable(keys.active_key(key, language, country))
        if text is None and country:
            # fr-CA falls back to plain fr
            text = await self.store.read_nullable(keys.build_key(key, language))
        if text is not None:
            return text
        if default_value is not None:
            return default_value
        log.debug("Missing translation for %r (%s-%s)", key, language, country or "")
        return missing_translation(key)

    async def get_stored_keys(self) -> List[str]:
        return [k for k in await self.store.keys() if keys.is_translation_key(k)]

    async def get_all_keys(self) -> List[str]:
        return await self.store.keys()
