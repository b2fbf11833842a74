from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncEngine

from ..core.errors import KeyNotFoundError
from .db import StorageBackend, build_dsn, init_engine, init_sessionmaker
from .migrate import migrate
from .models import TranslationRecord

log = logging.getLogger(__name__)

__all__ = ["StorageBackend", "TranslationStore", "open_store"]


class TranslationStore:
    """Durable string-to-string store. Each write is its own transaction."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.SessionLocal = init_sessionmaker(engine)

    async def write(self, key: str, value: str) -> None:
        async with self.SessionLocal() as s:
            row = await s.get(TranslationRecord, key)
            if row is None:
                s.add(TranslationRecord(key=key, value=value))
            else:
                row.value = value
            await s.commit()

    async def write_map(self, data: Mapping[str, str]) -> int:
        # Sequential, one record at a time; earlier writes stay if a later one fails
        count = 0
        for key, value in data.items():
            await self.write(key, value)
            count += 1
        return count

    async def read_nullable(self, key: str) -> Optional[str]:
        async with self.SessionLocal() as s:
            row = await s.get(TranslationRecord, key)
            return row.value if row else None

    async def read(self, key: str, default: Optional[str] = None) -> str:
        value = await self.read_nullable(key)
        if value is not None:
            return value
        if default is None:
            raise KeyNotFoundError(key)
        return default

    async def keys(self) -> List[str]:
        async with self.SessionLocal() as s:
            rows = (await s.execute(select(TranslationRecord.key).order_by(TranslationRecord.key))).scalars().all()
        return list(rows)

    async def delete(self, key: str) -> None:
        async with self.SessionLocal() as s:
            await s.execute(delete(TranslationRecord).where(TranslationRecord.key == key))
            await s.commit()

    async def clear(self) -> None:
        async with self.SessionLocal() as s:
            await s.execute(delete(TranslationRecord))
            await s.commit()

    async def dispose(self) -> None:
        await self.engine.dispose()


async def open_store(
    storage_path: Optional[str] = None,
    backend: StorageBackend | str = StorageBackend.FILE,
    database_url: Optional[str] = None,
) -> TranslationStore:
    dsn = database_url or build_dsn(storage_path, backend)
    engine = init_engine(dsn)
    await migrate(engine)
    log.info("Opened translation storage (%s)", StorageBackend.parse(backend).value if not database_url else "url")
    return TranslationStore(engine)
