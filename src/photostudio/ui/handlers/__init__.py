"""Event handlers for the Photo Studio UI.

Handlers are grouped by tab:

- studio: dealer/showroom selection and portrait generation
- history: cache-first history loading, selection and deletes
"""

from .history import (
    delete_history_item,
    history_gallery,
    history_rows,
    load_history_view,
    select_history_item,
)
from .studio import generate_portraits, select_dealer

__all__ = [
    # Studio
    "generate_portraits",
    "select_dealer",
    # History
    "delete_history_item",
    "history_gallery",
    "history_rows",
    "load_history_view",
    "select_history_item",
]
