"""Studio tab handlers: form updates and portrait generation."""

import logging

import gradio as gr

from photostudio.core.catalog import default_showroom, showrooms_for
from photostudio.core.config import config
from photostudio.core.errors import SourceImageError, StudioError
from photostudio.core.images import data_url_to_image, file_to_data_url, save_portrait
from photostudio.core.prompt_builder import SHOT_LABELS, SHOT_TYPES

from ..models import StudioState
from ..state import initialize_studio_state
from ..validation import ValidationError, limit_source_images
from ..workflow import user_message

logger = logging.getLogger(__name__)


def select_dealer(dealer: str, state: StudioState) -> tuple[dict, StudioState]:
    """Reset the showroom dropdown to the chosen dealer's showrooms.

    Args:
        dealer: Newly selected dealer
        state: UI state

    Returns:
        Tuple of (showroom_dropdown_update, updated_state)
    """
    state.dealer = dealer
    state.showroom = default_showroom(dealer)
    return gr.update(choices=showrooms_for(dealer), value=state.showroom), state


async def generate_portraits(
    name: str,
    dealer: str,
    showroom: str,
    background_type: str,
    image_1: str | None,
    image_2: str | None,
    image_3: str | None,
    state: StudioState,
):
    """Generate the three portraits for the studio form.

    Empty upload slots are skipped, so any one to three filled slots work.

    Args:
        name: Sales representative's name
        dealer: Selected dealer
        showroom: Selected showroom
        background_type: Selected background type
        image_1: First source image file path (or None)
        image_2: Second source image file path (or None)
        image_3: Third source image file path (or None)
        state: UI state

    Returns:
        Tuple of (front_image, side_image, full_image, download_files,
        status_markdown, updated_state)
    """
    empty = (None, None, None, None)

    try:
        state = initialize_studio_state(state)
        state.dealer, state.showroom, state.background_type = dealer, showroom, background_type

        files = limit_source_images([image_1, image_2, image_3])
        source_images = [file_to_data_url(path) for path in files]
        portraits = await state.workflow.generate(
            name, dealer, showroom, background_type, source_images
        )

    except (ValidationError, StudioError, SourceImageError) as e:
        logger.warning(f"Generation not completed: {e}")
        return *empty, f"*{user_message(e)}*", state
    except Exception as e:
        logger.error(f"Error generating portraits: {e}", exc_info=True)
        return *empty, f"*{user_message(e)}*", state

    results = portraits.as_dict()
    state.last_result = results

    # Download files are a convenience; the generation already succeeded.
    try:
        state.last_files = {
            shot: str(save_portrait(results[shot], name, shot, config.outputs_dir))
            for shot in SHOT_TYPES
        }
    except OSError as e:
        logger.error(f"Failed to write download files: {e}")
        state.last_files = {}

    images = [data_url_to_image(results[shot]) for shot in SHOT_TYPES]
    labels = ", ".join(SHOT_LABELS[shot] for shot in SHOT_TYPES)
    status = f"**{name.strip()}** 님의 프로필 사진이 생성되었습니다 ({labels})."

    return *images, list(state.last_files.values()) or None, status, state
