"""Studio workflow: generation, history reconciliation and deletes.

:class:`StudioWorkflow` is the Gradio-independent core of the UI.  It calls
the generation client directly, then records the result in two places with
different guarantees:

- the **history cache** and the in-memory history list are updated
  synchronously and optimistically, so the new record is visible at once
- the **history API** create is submitted to :class:`BestEffortSync` and
  not awaited; if it fails, the failure is logged and the local state is
  left as it is

That leaves an accepted inconsistency window: an optimistic record carries a
local id (epoch milliseconds) until the next successful history refresh
replaces the list with server truth.  Deleting such a record before the
refresh removes it locally and sends a delete the server answers with 404,
which is ignored like every other backend delete failure.

The cache file is shared by every session and survives restarts, so a
session always loads it before its first write.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from photostudio.core.errors import (
    ConfigurationError,
    NotFoundError,
    PersistenceError,
    StudioError,
)
from photostudio.core.generation_client import GeneratedPortraits, GenerationClient
from photostudio.core.history_cache import HistoryCache
from photostudio.core.history_sync import BestEffortSync, HistoryApiClient

from .validation import ValidationError, limit_source_images, validate_generation_input

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "이미지 생성 중 오류가 발생했습니다."


def user_message(error: Exception) -> str:
    """Map a generation failure to the message shown to the user.

    Configuration and validation errors carry their own user-facing text;
    everything else gets the generic failure message.
    """
    if isinstance(error, (ConfigurationError, ValidationError)):
        return str(error)
    return GENERIC_FAILURE_MESSAGE


class StudioWorkflow:
    """Orchestrate one UI session.

    Args:
        generation_client: Client producing the three portraits
        cache: Local history cache
        api_client: History API client
        sync: Background runner for backend writes (created if omitted)
    """

    def __init__(
        self,
        generation_client: GenerationClient,
        cache: HistoryCache,
        api_client: HistoryApiClient,
        sync: BestEffortSync | None = None,
    ):
        self.generation_client = generation_client
        self.cache = cache
        self.api_client = api_client
        self.sync = sync or BestEffortSync()
        self.history: list[dict] = []
        self.history_loaded = False

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate(
        self,
        name: str,
        dealer: str,
        showroom: str,
        background_type: str,
        source_images: list[str],
    ) -> GeneratedPortraits:
        """Generate portraits and record them.

        Args:
            name: Sales representative's name
            dealer: Selected dealer
            showroom: Selected showroom
            background_type: ``solid``, ``logo`` or ``showroom``
            source_images: Uploaded ``data:`` URLs (only the first three are used)

        Returns:
            The generated portraits

        Raises:
            ValidationError: If the name or the images are missing
            ConfigurationError, UpstreamGenerationError, ValueError: From the
                generation client; nothing is recorded in that case
        """
        images = limit_source_images(source_images)
        validate_generation_input(name, dealer, showroom, background_type, images)
        name = name.strip()

        # The cache file is shared; never overwrite it from an unloaded view.
        if not self.history_loaded:
            self.load_cached_history()

        try:
            portraits = await self.generation_client.generate(images, background_type, name)
        except (StudioError, ValueError) as e:
            logger.error(f"Generation failed for {name}: {e}")
            raise

        payload = {
            "name": name,
            "dealer": dealer,
            "showroom": showroom,
            "image_front": portraits.front,
            "image_side": portraits.side,
            "image_full": portraits.full,
            "background_type": background_type,
        }

        # Fire-and-forget; a failed save never affects what the user sees.
        self.sync.submit(self.api_client.create_record(payload), f"history save for {name}")

        record = {
            "id": int(time.time() * 1000),
            **payload,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.history = [record, *self.history]
        self._write_cache()

        return portraits

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def load_cached_history(self) -> list[dict]:
        """Show the cached history immediately (possibly stale or empty)."""
        self.history = self.cache.load()
        self.history_loaded = True
        return self.history

    async def refresh_history(self) -> list[dict]:
        """Reconcile the history view with the server.

        On success the server list replaces both the in-memory view and the
        cache.  On failure the current (cached) view stays authoritative.

        Returns:
            The history list now shown
        """
        try:
            records = await self.api_client.fetch_history()
        except PersistenceError as e:
            logger.info(f"Using local cache for history: {e}")
            return self.history

        self.history = records
        self.history_loaded = True
        self._write_cache()
        return self.history

    async def delete(self, record_id: int) -> list[dict]:
        """Delete a record locally, then on the server.

        The local list and the cache are updated first.  A backend failure,
        including a 404, is logged and not surfaced.

        Returns:
            The history list now shown
        """
        if not self.history_loaded:
            self.load_cached_history()

        self.history = [record for record in self.history if record.get("id") != record_id]
        self._write_cache()

        try:
            await self.api_client.delete_record(record_id)
        except NotFoundError:
            logger.warning(f"History item {record_id} was not found on the server")
        except PersistenceError as e:
            logger.error(f"Delete failed for history item {record_id}: {e}")

        return self.history

    def find(self, record_id: int) -> dict | None:
        """Return the shown record with *record_id*, if any."""
        return next((record for record in self.history if record.get("id") == record_id), None)

    def _write_cache(self) -> None:
        try:
            self.cache.save(self.history)
        except OSError as e:
            logger.error(f"Failed to write history cache {self.cache.cache_path}: {e}")
