"""History tab handlers: cache-first loading, selection and deletes."""

import logging

import gradio as gr

from photostudio.core.errors import SourceImageError
from photostudio.core.images import data_url_to_image

from ..models import HISTORY_COLUMNS, StudioState
from ..state import initialize_studio_state

logger = logging.getLogger(__name__)


def history_rows(records: list[dict]) -> list[list]:
    """Flatten history records into table rows (see HISTORY_COLUMNS)."""
    return [[record.get(column) for column in HISTORY_COLUMNS] for record in records]


def history_gallery(records: list[dict]) -> list[tuple]:
    """Build gallery items (front portrait, caption) for the history list.

    Records whose front image is missing or undecodable are skipped.
    """
    items = []
    for record in records:
        payload = record.get("image_front")
        if not payload:
            continue
        try:
            image = data_url_to_image(payload)
        except (SourceImageError, OSError) as e:
            logger.debug(f"Skipping history item {record.get('id')} in gallery: {e}")
            continue
        caption = f"{record.get('name', '')} · {record.get('dealer', '')} {record.get('showroom', '')}"
        items.append((image, caption))
    return items


def _history_status(records: list[dict], source: str) -> str:
    if not records:
        return "*저장된 히스토리가 없습니다.*"
    return f"*{len(records)}개의 기록 ({source})*"


async def load_history_view(state: StudioState):
    """Populate the history tab: cached view first, then server truth.

    This is a generator handler.  The first update renders the cache
    immediately; the second replaces it with the server list when the live
    fetch succeeds, or keeps the cached view when it fails.

    Args:
        state: UI state

    Yields:
        Tuples of (gallery_items, table_rows, status_markdown, updated_state)
    """
    try:
        state = initialize_studio_state(state)
        workflow = state.workflow

        cached = workflow.load_cached_history()
        yield history_gallery(cached), history_rows(cached), _history_status(cached, "로컬"), state

        records = await workflow.refresh_history()
        source = "서버" if records is not cached else "로컬"
        yield history_gallery(records), history_rows(records), _history_status(records, source), state

    except Exception as e:
        logger.error(f"Error loading history: {e}", exc_info=True)
        yield [], [], f"*히스토리를 불러오지 못했습니다: {e}*", state


def select_history_item(evt: gr.SelectData, state: StudioState):
    """Show all three portraits of the record picked in the gallery.

    Args:
        evt: Gradio SelectData event containing the selected index
        state: UI state

    Returns:
        Tuple of (front_image, side_image, full_image, record_id, updated_state)
    """
    try:
        state = initialize_studio_state(state)
        shown = [record for record in state.history if record.get("image_front")]

        if evt.index is None or evt.index >= len(shown):
            return None, None, None, None, state

        record = shown[evt.index]
        images = []
        for column in ("image_front", "image_side", "image_full"):
            payload = record.get(column)
            images.append(data_url_to_image(payload) if payload else None)

        return *images, record.get("id"), state

    except Exception as e:
        logger.error(f"Error selecting history item: {e}", exc_info=True)
        return None, None, None, None, state


async def delete_history_item(record_id, state: StudioState):
    """Delete a history record (locally first, then on the server).

    Args:
        record_id: Id entered or selected in the history tab
        state: UI state

    Returns:
        Tuple of (gallery_items, table_rows, status_markdown, updated_state)
    """
    try:
        state = initialize_studio_state(state)

        if record_id is None or record_id == "":
            return gr.update(), gr.update(), "*삭제할 기록을 선택해주세요.*", state

        record_id = int(record_id)
        if state.workflow.find(record_id) is None:
            return gr.update(), gr.update(), f"*기록을 찾을 수 없습니다: {record_id}*", state

        records = await state.workflow.delete(record_id)
        logger.info(f"Deleted history item {record_id} from the history view")
        return history_gallery(records), history_rows(records), f"*기록 {record_id}이(가) 삭제되었습니다.*", state

    except (TypeError, ValueError):
        return gr.update(), gr.update(), f"*잘못된 기록 번호입니다: {record_id}*", state
    except Exception as e:
        logger.error(f"Error deleting history item: {e}", exc_info=True)
        return gr.update(), gr.update(), f"*삭제 중 오류가 발생했습니다: {e}*", state
