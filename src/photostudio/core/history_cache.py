"""Client-side history cache.

The UI keeps a local mirror of the history list in a single JSON file so the
history view can render immediately, and keep working when the history API
is unreachable.  The cache is a plain mirror:

- it is read first whenever the history view is opened
- a successful live fetch overwrites it with server truth
- a new generation is prepended to it optimistically
- a delete removes the record from it before the backend is told

Loading is forgiving.  A missing, empty or corrupt file is treated as an
empty history rather than an error, so a damaged cache never blocks the UI.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class HistoryCache:
    """JSON-file mirror of the history record list.

    Args:
        cache_path: Path of the JSON cache file
    """

    def __init__(self, cache_path: Path):
        self.cache_path = Path(cache_path)

    def load(self) -> list[dict]:
        """Load the cached records (possibly stale or empty).

        Returns:
            Cached record dictionaries in stored order
        """
        if not self.cache_path.exists():
            return []

        try:
            with open(self.cache_path, encoding="utf-8") as handle:
                raw_entries = json.load(handle)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable history cache {self.cache_path}: {e}")
            return []

        if not isinstance(raw_entries, list):
            return []

        return [entry for entry in raw_entries if isinstance(entry, dict)]

    def save(self, records: list[dict]) -> None:
        """Overwrite the cached list with *records*.

        Args:
            records: Record dictionaries to persist
        """
        self.cache_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.cache_path, "w", encoding="utf-8") as handle:
            json.dump(list(records), handle, ensure_ascii=False)

