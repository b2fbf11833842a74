from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from .db import set_sqlite_pragmas
from .models import Base

log = logging.getLogger(__name__)


async def migrate(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await set_sqlite_pragmas(engine)
    log.debug("Storage schema ready at %s", engine.url.render_as_string(hide_password=True))
