"""Data models for the Photo Studio UI state."""

import logging
from dataclasses import dataclass, field
from typing import Any

from photostudio.core.catalog import DEFAULT_DEALER, default_showroom

logger = logging.getLogger(__name__)


@dataclass
class StudioState:
    """Session state for the Gradio UI.

    Each browser session gets its own StudioState instance.  The workflow
    (generation client, history cache and API client) is attached lazily by
    :func:`photostudio.ui.state.initialize_studio_state`, after Gradio has
    copied the default state for the session.

    Attributes
    ----------
    workflow : Any | None
        StudioWorkflow instance for this session
    dealer : str
        Currently selected dealer
    showroom : str | None
        Currently selected showroom
    background_type : str
        Currently selected background type
    last_result : dict[str, str] | None
        Portraits of the last successful generation, keyed by shot type
    last_files : dict[str, str]
        Download file paths of the last generation, keyed by shot type
    """

    workflow: Any | None = None  # StudioWorkflow instance

    # Form selections
    dealer: str = DEFAULT_DEALER
    showroom: str | None = field(default_factory=lambda: default_showroom(DEFAULT_DEALER))
    background_type: str = "solid"

    # Results
    last_result: dict[str, str] | None = None
    last_files: dict[str, str] = field(default_factory=dict)

    def is_initialized(self) -> bool:
        """Check if the workflow has been attached.

        Returns:
            True if the session workflow exists
        """
        return self.workflow is not None

    @property
    def history(self) -> list[dict]:
        """History records currently shown to the user."""
        if self.workflow is None:
            return []
        return self.workflow.history

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"StudioState(initialized={self.is_initialized()}, "
            f"dealer={self.dealer}, showroom={self.showroom}, "
            f"history={len(self.history)})"
        )


# UI Constants
MAX_SOURCE_IMAGES = 3

# Column order of the history table.
HISTORY_COLUMNS = ["id", "name", "dealer", "showroom", "background_type", "created_at"]
HISTORY_HEADERS = ["ID", "이름", "딜러", "전시장", "배경", "생성일"]
