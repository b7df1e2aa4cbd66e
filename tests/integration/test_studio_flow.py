"""End-to-end studio flow: workflow and history API in one process.

The workflow's history client talks to the real FastAPI app through
``httpx.ASGITransport``, backed by a temporary SQLite store.  Generation
uses the fake SDK client.
"""

import asyncio

import httpx
import pytest

from photostudio.api.main import app, get_history_db
from photostudio.core.history_cache import HistoryCache
from photostudio.core.history_sync import HistoryApiClient
from photostudio.ui.workflow import StudioWorkflow


@pytest.fixture
def workflow(history_db, generation_client, temp_dir):
    app.dependency_overrides[get_history_db] = lambda: history_db
    try:
        yield StudioWorkflow(
            generation_client=generation_client,
            cache=HistoryCache(temp_dir / "history_cache.json"),
            api_client=HistoryApiClient(
                "http://studio.test", transport=httpx.ASGITransport(app=app)
            ),
        )
    finally:
        app.dependency_overrides.clear()


def test_generate_refresh_delete(workflow, history_db, source_image):
    """A generation reaches the store, a refresh adopts server ids, delete removes it."""

    async def scenario():
        await workflow.generate("Kim", "마이스터모터스", "강남대치", "solid", [source_image])
        await workflow.sync.drain()

        optimistic_id = workflow.history[0]["id"]
        records = await workflow.refresh_history()
        return optimistic_id, records

    optimistic_id, records = asyncio.run(scenario())

    assert history_db.count() == 1
    assert len(records) == 1
    server_id = records[0]["id"]
    assert server_id != optimistic_id
    assert records[0]["name"] == "Kim"
    assert workflow.cache.load() == records

    asyncio.run(workflow.delete(server_id))

    assert history_db.count() == 0
    assert workflow.history == []


def test_optimistic_delete_before_refresh(workflow, history_db, source_image):
    """Deleting the optimistic record only removes it locally; the 404 is ignored."""

    async def scenario():
        await workflow.generate("Kim", "마이스터모터스", "강남대치", "logo", [source_image])
        await workflow.sync.drain()
        await workflow.delete(workflow.history[0]["id"])

    asyncio.run(scenario())

    assert workflow.history == []
    assert history_db.count() == 1
