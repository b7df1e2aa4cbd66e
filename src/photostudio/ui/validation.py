"""Validation utilities for Photo Studio UI inputs."""

import logging

from photostudio.core.catalog import is_valid_showroom
from photostudio.core.prompt_builder import BACKGROUND_TYPES

from .models import MAX_SOURCE_IMAGES

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "이름과 사진을 입력해주세요."


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def limit_source_images(source_images: list[str] | None) -> list[str]:
    """Keep at most the first three uploaded images.

    Uploads beyond the available slots are dropped, not rejected.
    """
    images = [image for image in (source_images or []) if image]
    if len(images) > MAX_SOURCE_IMAGES:
        logger.info(f"Dropping {len(images) - MAX_SOURCE_IMAGES} extra source image(s)")
    return images[:MAX_SOURCE_IMAGES]


def validate_generation_input(
    name: str | None,
    dealer: str | None,
    showroom: str | None,
    background_type: str | None,
    source_images: list[str],
) -> None:
    """Validate the studio form before a generation is started.

    Args:
        name: Sales representative's name
        dealer: Selected dealer
        showroom: Selected showroom
        background_type: Selected background type
        source_images: Uploaded images (already limited to three)

    Raises:
        ValidationError: If validation fails with user-friendly message
    """
    if not name or not name.strip() or not source_images:
        raise ValidationError(MISSING_INPUT_MESSAGE)

    if not is_valid_showroom(dealer, showroom):
        raise ValidationError(f"'{dealer}' 딜러의 전시장을 선택해주세요.")

    if background_type not in BACKGROUND_TYPES:
        raise ValidationError(f"알 수 없는 배경 유형입니다: {background_type}")
