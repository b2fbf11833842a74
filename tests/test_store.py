"""
Key-value storage tests
"""
import pytest

from localize.core.errors import KeyNotFoundError
from localize.infra.db import MEMORY_DSN, build_dsn
from localize.infra.store import StorageBackend, open_store


class TestTranslationStore:

    async def test_write_and_read(self, store):
        await store.write("en:a", "A")
        assert await store.read("en:a") == "A"
        assert await store.read_nullable("en:a") == "A"

    async def test_overwrite(self, store):
        await store.write("k", "1")
        await store.write("k", "2")
        assert await store.read("k") == "2"
        assert await store.keys() == ["k"]

    async def test_missing_key(self, store):
        assert await store.read_nullable("nope") is None
        assert await store.read("nope", default="d") == "d"
        with pytest.raises(KeyNotFoundError):
            await store.read("nope")

    async def test_keys_are_ordered(self, store):
        assert await store.write_map({"b": "2", "a": "1", "c": "3"}) == 3
        assert await store.keys() == ["a", "b", "c"]

    async def test_delete_and_clear(self, store):
        await store.write_map({"a": "1", "b": "2"})
        await store.delete("a")
        assert await store.keys() == ["b"]
        await store.clear()
        assert await store.keys() == []


class TestFileBackend:

    async def test_persists_across_reopen(self, tmp_path):
        first = await open_store(str(tmp_path / "db"), StorageBackend.FILE)
        await first.write("en:hello", "Hello")
        await first.dispose()

        assert (tmp_path / "db" / "translations.db").exists()

        second = await open_store(str(tmp_path / "db"), "file")
        try:
            assert await second.read("en:hello") == "Hello"
        finally:
            await second.dispose()

    async def test_database_url_override(self, tmp_path):
        url = f"sqlite+aiosqlite:///{(tmp_path / 'custom.db').as_posix()}"
        s = await open_store(database_url=url)
        try:
            await s.write("x", "y")
        finally:
            await s.dispose()
        assert (tmp_path / "custom.db").exists()


class TestBackendSelection:

    def test_backend_name_is_case_insensitive(self):
        assert StorageBackend.parse("MEMORY") is StorageBackend.MEMORY
        assert StorageBackend.parse(" File ") is StorageBackend.FILE
        assert build_dsn(None, "MEMORY") == MEMORY_DSN

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError):
            StorageBackend.parse("redis")

    async def test_open_store_with_uppercase_backend(self):
        s = await open_store(backend="Memory")
        try:
            await s.write("en:a", "A")
            assert await s.read("en:a") == "A"
        finally:
            await s.dispose()
