"""Photo Studio — FastAPI Application.

This module defines the FastAPI ``app`` instance serving the generation
history, and the ``main()`` CLI function that launches the uvicorn server.

Architecture
------------
- **Record store**: a :class:`~photostudio.core.history_db.HistoryDB` is
  created in the lifespan hook and kept on ``app.state``.  Route handlers
  receive it through the :func:`get_history_db` dependency, which tests
  override.
- **Generation** is *not* served here.  The UI calls the Gemini API
  directly and only reports finished generations to this API.
- **Errors** are returned as ``{"error": "<message>"}`` with generic
  messages; store details go to the log only.
- Store-backed handlers are plain ``def`` functions, so FastAPI runs each
  SQLite statement in its worker thread pool instead of on the event loop.

Endpoints
---------
========  =========================  =====================================
Method    Path                       Purpose
========  =========================  =====================================
GET       ``/api/health``            Liveness and version
GET       ``/api/catalog``           Dealers, showrooms, background types
GET       ``/api/stats``             Number of stored records
GET       ``/api/history``           All records, newest first
POST      ``/api/history``           Store one finished generation
DELETE    ``/api/history/{id}``      Delete one record
========  =========================  =====================================

Usage
-----
CLI (installed entry point)::

    photostudio-api

Direct invocation::

    python -m photostudio.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from photostudio import __version__
from photostudio.api.models import (
    DeleteResponse,
    ErrorResponse,
    HistoryCreateRequest,
    HistoryCreateResponse,
    HistoryItem,
)
from photostudio.core.catalog import DEALER_SHOWROOMS, DEFAULT_DEALER
from photostudio.core.config import config
from photostudio.core.errors import PersistenceError
from photostudio.core.history_db import HistoryDB
from photostudio.core.prompt_builder import BACKGROUND_TYPES, SHOT_TYPES

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch history"
SAVE_FAILED = "Failed to save history"
DELETE_FAILED = "Failed to delete item"
NOT_FOUND = "Item not found"
STATS_FAILED = "Failed to fetch stats"


# ---------------------------------------------------------------------------
# Application lifecycle: record store setup.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the history database on startup.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.history_db = HistoryDB(config.db_path)
    logger.info(f"History store ready at {config.db_path}")

    yield

    logger.info("History API shutting down.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Photo Studio History API",
    description="Generation history for the sales representative photo studio.",
    version=__version__,
    lifespan=lifespan,
)

# The UI may be served from a different port during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_history_db(request: Request) -> HistoryDB:
    """Return the record store attached to the running application."""
    return request.app.state.history_db


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/health")
async def health() -> dict:
    """Report that the API is up."""
    return {"status": "ok", "version": __version__}


@app.get("/api/catalog")
async def get_catalog() -> dict:
    """Return the static selection data used by clients.

    Returns:
        Dictionary with ``dealers`` (dealer → showrooms), ``default_dealer``,
        ``background_types`` and ``shot_types``.
    """
    return {
        "dealers": DEALER_SHOWROOMS,
        "default_dealer": DEFAULT_DEALER,
        "background_types": list(BACKGROUND_TYPES),
        "shot_types": list(SHOT_TYPES),
    }


@app.get("/api/stats", responses={500: {"model": ErrorResponse}})
def get_stats(db: HistoryDB = Depends(get_history_db)):
    """Return history statistics.

    Returns:
        Dictionary with ``total_records``, or a 500 error body if the store
        fails.
    """
    try:
        total = db.count()
    except PersistenceError as e:
        logger.error(f"Failed to count history: {e}")
        return _error(500, STATS_FAILED)
    return {"total_records": total}


@app.get(
    "/api/history",
    response_model=list[HistoryItem],
    responses={500: {"model": ErrorResponse}},
)
def list_history(db: HistoryDB = Depends(get_history_db)):
    """Return every history record, newest first.

    Returns:
        List of records, or a 500 error body if the store fails.
    """
    try:
        records = db.list_records()
    except PersistenceError as e:
        logger.error(f"Failed to fetch history: {e}")
        return _error(500, FETCH_FAILED)
    return [record.to_dict() for record in records]


@app.post(
    "/api/history",
    response_model=HistoryCreateResponse,
    responses={500: {"model": ErrorResponse}},
)
def create_history(req: HistoryCreateRequest, db: HistoryDB = Depends(get_history_db)):
    """Store one finished generation.

    No validation beyond presence is done here; values go to the store as
    given and the store decides whether the row is acceptable.

    Args:
        req: Parsed :class:`HistoryCreateRequest` payload.

    Returns:
        ``{"id": <new id>}``, or a 500 error body if the insert fails.
    """
    try:
        record_id = db.create(
            req.name,
            req.dealer,
            req.showroom,
            req.image_front,
            req.image_side,
            req.image_full,
            req.background_type,
        )
    except PersistenceError as e:
        logger.error(f"Failed to save history: {e}")
        return _error(500, SAVE_FAILED)
    return {"id": record_id}


@app.delete(
    "/api/history/{item_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def delete_history(item_id: str, db: HistoryDB = Depends(get_history_db)):
    """Delete one history record.

    A non-numeric id can never match a record and is reported as not found.

    Args:
        item_id: Record id from the URL path.

    Returns:
        ``{"success": true}``, a 404 body if no record matched, or a 500 body
        if the store fails.
    """
    logger.info(f"Attempting to delete history item with id: {item_id}")

    try:
        record_id = int(item_id)
    except ValueError:
        logger.warning(f"No item found with id {item_id}")
        return _error(404, NOT_FOUND)

    try:
        deleted = db.delete_by_id(record_id)
    except PersistenceError as e:
        logger.error(f"Failed to delete item {item_id}: {e}")
        return _error(500, DELETE_FAILED)

    if not deleted:
        return _error(404, NOT_FOUND)
    return {"success": True}


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~photostudio.core.config.config` (which
    loads from ``PHOTOSTUDIO_SERVER_HOST`` and ``PHOTOSTUDIO_SERVER_PORT``).
    Defaults to ``0.0.0.0:3000``.

    This function is registered as the ``photostudio-api`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    uvicorn.run(
        "photostudio.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
