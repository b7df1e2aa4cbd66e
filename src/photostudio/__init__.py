"""Photo Studio - AI corporate portraits for dealership sales representatives."""

__version__ = "0.1.0"

from photostudio.core.config import StudioConfig, config
from photostudio.core.generation_client import GeneratedPortraits, GenerationClient
from photostudio.core.history_db import HistoryDB, HistoryRecord

__all__ = [
    "GeneratedPortraits",
    "GenerationClient",
    "HistoryDB",
    "HistoryRecord",
    "StudioConfig",
    "config",
]
