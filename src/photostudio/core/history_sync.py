"""History API client and best-effort background sync.

The UI never waits for the history API before showing results.  After a
generation it fires the create request in the background and moves on; a
delete is applied locally first and sent afterwards.  This module provides
the two pieces behind that policy:

HistoryApiClient
    Thin ``httpx`` client for ``/api/history``.  HTTP and transport
    failures are translated into :class:`PersistenceError`, a 404 on delete
    into :class:`NotFoundError`.
BestEffortSync
    Runs submitted coroutines as background tasks.  Failures are logged and
    never propagated, so a failed save can't roll back or block what the
    user already sees.  ``drain()`` waits for outstanding work, which tests
    and shutdown use.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

import httpx

from .errors import NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

HISTORY_PATH = "/api/history"


class HistoryApiClient:
    """Async client for the history HTTP API.

    A fresh ``httpx.AsyncClient`` is opened per call so the client can be
    shared between Gradio sessions regardless of which event loop runs them.

    Args:
        base_url: API root, e.g. ``http://localhost:3000``
        transport: Optional ``httpx`` transport (tests pass a MockTransport
            or an ASGITransport)
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            transport=self._transport,
            timeout=self._timeout,
        )

    async def fetch_history(self) -> list[dict]:
        """Fetch the full history list from the server.

        Raises:
            PersistenceError: If the request fails or returns a non-2xx status
        """
        try:
            async with self._client() as client:
                response = await client.get(HISTORY_PATH)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise PersistenceError(f"Failed to fetch history: {e}") from e

        if not isinstance(data, list):
            raise PersistenceError("History API returned a non-list payload")
        return data

    async def create_record(self, payload: dict) -> int:
        """Persist one record on the server.

        Args:
            payload: Record fields (name, dealer, showroom, image_front,
                image_side, image_full, background_type)

        Returns:
            Server-assigned record id

        Raises:
            PersistenceError: If the request fails or the response has no id
        """
        try:
            async with self._client() as client:
                response = await client.post(HISTORY_PATH, json=payload)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise PersistenceError(f"Failed to save history: {e}") from e

        record_id = data.get("id") if isinstance(data, dict) else None
        if not isinstance(record_id, int):
            raise PersistenceError("History API response did not include an id")
        return record_id

    async def delete_record(self, record_id: int) -> None:
        """Delete one record on the server.

        Raises:
            NotFoundError: If the server has no record with that id
            PersistenceError: On any other failure
        """
        try:
            async with self._client() as client:
                response = await client.delete(f"{HISTORY_PATH}/{record_id}")
        except httpx.HTTPError as e:
            raise PersistenceError(f"Failed to delete item {record_id}: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(f"Item not found: {record_id}")
        if response.is_error:
            raise PersistenceError(
                f"Failed to delete item {record_id}: HTTP {response.status_code}"
            )


class BestEffortSync:
    """Fire-and-forget runner for backend writes.

    Submitted coroutines run as tasks on the current event loop.  Strong
    references are held until each task finishes so it isn't garbage
    collected mid-flight.
    """

    def __init__(self):
        self._pending: set[asyncio.Task] = set()
        self.failures = 0

    @property
    def pending(self) -> int:
        """Number of background writes still running."""
        return len(self._pending)

    def submit(self, coro: Coroutine[Any, Any, Any], description: str) -> asyncio.Task:
        """Schedule *coro* in the background.

        Must be called from a running event loop.

        Args:
            coro: Coroutine performing the backend write
            description: Short label used in log messages

        Returns:
            The created task (callers normally ignore it)
        """
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(lambda done: self._finished(done, description))
        return task

    def _finished(self, task: asyncio.Task, description: str) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning(f"Background {description} was cancelled")
            return

        error = task.exception()
        if error is not None:
            self.failures += 1
            logger.warning(f"Background {description} failed: {error}")
        else:
            logger.debug(f"Background {description} completed")

    async def drain(self) -> None:
        """Wait until every submitted write has finished (successfully or not)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
