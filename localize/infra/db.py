from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


DB_FILE_NAME = "translations.db"
MEMORY_DSN = "sqlite+aiosqlite://"


class StorageBackend(str, Enum):
    FILE = "file"
    MEMORY = "memory"

    @classmethod
    def parse(cls, value: "StorageBackend | str") -> "StorageBackend":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown storage backend: {value!r}. Use 'file' or 'memory'") from None


def build_dsn(storage_path: Optional[str], backend: StorageBackend | str = StorageBackend.FILE) -> str:
    if StorageBackend.parse(backend) is StorageBackend.MEMORY:
        return MEMORY_DSN
    root = Path(storage_path or "data")
    root.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{(root / DB_FILE_NAME).as_posix()}"


def init_engine(dsn: str) -> AsyncEngine:
    if dsn == MEMORY_DSN:
        # Single shared connection, otherwise every checkout sees an empty database
        return create_async_engine(
            dsn,
            future=True,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(dsn, future=True, echo=False)


def init_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def set_sqlite_pragmas(engine: AsyncEngine) -> None:
    if engine.url.get_backend_name() != "sqlite" or not engine.url.database:
        return
    async with engine.begin() as conn:
        await conn.exec_driver_sql("PRAGMA journal_mode=WAL;")
        await conn.exec_driver_sql("PRAGMA synchronous=NORMAL;")
