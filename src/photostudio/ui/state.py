"""State management utilities for the Photo Studio UI.

This module attaches the session workflow (generation client, history cache
and history API client) to a :class:`StudioState`.
"""

import logging

from photostudio.core.config import StudioConfig, config
from photostudio.core.generation_client import GenerationClient
from photostudio.core.history_cache import HistoryCache
from photostudio.core.history_sync import HistoryApiClient

from .models import StudioState
from .workflow import StudioWorkflow

logger = logging.getLogger(__name__)


def build_workflow(settings: StudioConfig | None = None) -> StudioWorkflow:
    """Create a workflow wired to the configured services.

    The API credential is injected into the generation client here; a
    missing credential only surfaces when a generation is attempted.

    Args:
        settings: Configuration to use (default: global config)

    Returns:
        New StudioWorkflow instance
    """
    settings = settings or config

    if not settings.has_api_key:
        logger.warning("Gemini API key is not configured; generation will be refused.")

    return StudioWorkflow(
        generation_client=GenerationClient(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
        ),
        cache=HistoryCache(settings.cache_path),
        api_client=HistoryApiClient(settings.api_base_url),
    )


def initialize_studio_state(
    state: StudioState | None = None, settings: StudioConfig | None = None
) -> StudioState:
    """Initialize or ensure UI state is ready.

    Args:
        state: Existing StudioState or None
        settings: Configuration to use (default: global config)

    Returns:
        Initialized StudioState instance
    """
    if state is None:
        logger.info("Creating new StudioState")
        state = StudioState()

    if state.is_initialized():
        logger.debug("StudioState already initialized")
        return state

    logger.info("Initializing StudioState workflow...")
    state.workflow = build_workflow(settings)
    logger.info(f"StudioState initialization complete: {state}")
    return state
