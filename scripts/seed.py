#!/usr/bin/env python3
"""Warm the translation storage from the configured sources without starting an app."""
from __future__ import annotations

import asyncio

from localize.core.config import InitOptions, settings
from localize.core.ingest import TranslationIngestor
from localize.core.logging_config import setup_logging
from localize.infra.store import open_store


async def main() -> None:
    setup_logging(log_file=settings.LOG_FILE, debug=settings.DEBUG, config_path=settings.LOG_CONFIG or None)
    options = InitOptions.from_settings()
    store = await open_store(options.storage_path, options.storage_backend, options.database_url)
    try:
        merged = await TranslationIngestor(store, options.json_mapper).ingest(
            options.asset_loader, options.asset_loaders_extra
        )
        print(f"Seeded {len(merged)} translation entries")
    finally:
        await store.dispose()


if __name__ == "__main__":
    asyncio.run(main())
