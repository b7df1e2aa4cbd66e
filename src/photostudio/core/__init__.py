"""Core functionality for the Photo Studio.

This package holds everything the API server and the UI share:

- **config.py**: Environment-based configuration using Pydantic Settings
  (``PHOTOSTUDIO_`` prefix, ``GEMINI_API_KEY`` for the credential)
- **errors.py**: Exception taxonomy (configuration, upstream, persistence)
- **catalog.py**: Static dealer/showroom catalog
- **images.py**: ``data:`` URL helpers for inline image payloads
- **prompt_builder.py**: Background and shot prompt tables
- **generation_client.py**: Concurrent three-shot generation via Gemini
- **history_db.py**: SQLite record store for generation history
- **history_cache.py**: JSON-file history cache used by the UI
- **history_sync.py**: History API client and best-effort background sync

Usage Example
-------------
    from photostudio.core import GenerationClient, HistoryDB, config

    client = GenerationClient(api_key=config.gemini_api_key, model=config.gemini_model)
    portraits = await client.generate(source_images, "solid", "Kim")

    db = HistoryDB(config.db_path)
    record_id = db.create("Kim", "마이스터모터스", "강남대치", portraits.front,
                          portraits.side, portraits.full, "solid")
"""

from photostudio.core.config import StudioConfig, config
from photostudio.core.generation_client import GeneratedPortraits, GenerationClient
from photostudio.core.history_cache import HistoryCache
from photostudio.core.history_db import HistoryDB, HistoryRecord
from photostudio.core.history_sync import BestEffortSync, HistoryApiClient

__all__ = [
    "BestEffortSync",
    "GeneratedPortraits",
    "GenerationClient",
    "HistoryApiClient",
    "HistoryCache",
    "HistoryDB",
    "HistoryRecord",
    "StudioConfig",
    "config",
]
