"""
Test configuration and fixtures for localize
"""
from typing import Any, Dict

import pytest
import pytest_asyncio

from localize.core.i18n import LocalizeAndTranslate
from localize.infra.store import StorageBackend, TranslationStore, open_store


@pytest_asyncio.fixture
async def store() -> TranslationStore:
    """Fresh in-memory store for each test"""
    s = await open_store(backend=StorageBackend.MEMORY)
    try:
        yield s
    finally:
        await s.dispose()


@pytest_asyncio.fixture
async def i18n(store: TranslationStore) -> LocalizeAndTranslate:
    """Context bound to the in-memory store (not yet initialized)"""
    ctx = LocalizeAndTranslate(store, locale_source=lambda: "en_US")
    try:
        yield ctx
    finally:
        await ctx.close()


@pytest.fixture
def english_docs() -> Dict[str, Any]:
    return {
        "en": {
            "app": {"greeting": "Hello", "farewell": "Goodbye"},
            "items": {"max": 50, "enabled": True, "tags": ["a", "b"]},
        },
        "ar": {
            "app": {"greeting": "مرحبا"},
        },
    }
