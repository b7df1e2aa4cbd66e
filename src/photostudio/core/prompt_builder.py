"""Shot prompt compilation for the portrait generator.

Every generation produces three shots of the same person.  Each shot prompt
is assembled from a fixed shot template with one slot, the background
description, which is chosen by the background type the user selected.

Template Structure::

    Generate a professional [corporate portrait | full-body corporate photo]
    of the person in the source image.
    Angle: [shot-specific framing]
    Pose: [shot-specific pose]
    Background: [background description]
    Lighting: [fixed studio lighting directive]
    Style: [fixed attire directive]
    [fixed likeness directive]

Both tables are constants rather than configuration: they define the house
style of the portraits.  The lookup functions are pure and total over the
known keys and reject anything else with :class:`UnknownBackgroundError`
(or ``KeyError`` for an unknown shot) before any request is built.

Usage
-----
::

    prompt = build_shot_prompt("front", "solid")
    prompts = build_all_prompts("showroom")  # {"front": ..., "side": ..., "full": ...}
"""

from __future__ import annotations

from .errors import UnknownBackgroundError

SHOT_TYPES: tuple[str, ...] = ("front", "side", "full")
BACKGROUND_TYPES: tuple[str, ...] = ("solid", "logo", "showroom")

# Human-readable labels for the UI radio buttons.
BACKGROUND_LABELS: dict[str, str] = {
    "solid": "단색 배경",
    "logo": "로고 배경",
    "showroom": "쇼룸 배경",
}

SHOT_LABELS: dict[str, str] = {
    "front": "정면",
    "side": "45도 측면",
    "full": "전신",
}

# ---------------------------------------------------------------------------
# Background descriptions, one per background type.
# ---------------------------------------------------------------------------

_BACKGROUND_PROMPTS: dict[str, str] = {
    "solid": (
        "a perfectly flat, solid light gray background (hex color #F3F4F6), no shadows, "
        "no gradients, minimalist professional studio style"
    ),
    "logo": (
        "a perfectly flat, solid white background (hex color #FFFFFF) with the specific "
        "dark blue Volkswagen circular logo (thin lines, minimalist 2D design, as seen in "
        "brand guidelines) positioned exactly in the top right corner. The logo should be "
        "clean, sharp, and high-contrast."
    ),
    "showroom": (
        "a specific high-end Volkswagen showroom interior. On the left, a silver Volkswagen "
        "Atlas SUV is parked. In the background, there is a large blue digital screen with "
        "the text 'Welcome to Volkswagen'. The floor is polished light gray tile, and there "
        "is a minimalist white reception desk. The lighting is bright, clean, and professional."
    ),
}

# ---------------------------------------------------------------------------
# Shot templates.  ``{background}`` is the only placeholder.
# ---------------------------------------------------------------------------

_LIGHTING_DIRECTIVE = (
    "Lighting: Standardized professional studio lighting, soft shadows, neutral color "
    "temperature. Ignore any lighting or background colors from the source image."
)
_STYLE_DIRECTIVE = "Style: High-quality photography, professional business attire."
_LIKENESS_DIRECTIVE = "The person's face and features must strictly match the source image."

_SHOT_TEMPLATES: dict[str, str] = {
    "front": (
        "Generate a professional corporate portrait of the person in the source image.\n"
        "Angle: Upper body front shot.\n"
        "Pose: Professional, friendly, standing straight, looking at the camera.\n"
        "Background: {background}.\n"
    ),
    "side": (
        "Generate a professional corporate portrait of the person in the source image.\n"
        "Angle: Upper body 45-degree side shot, head turned slightly towards the camera.\n"
        "Pose: Professional, friendly, confident.\n"
        "Background: {background}.\n"
    ),
    "full": (
        "Generate a professional full-body corporate photo of the person in the source image.\n"
        "Angle: Full body shot from head to toe.\n"
        "Pose: Standing professionally, confident posture, arms relaxed or slightly crossed.\n"
        "Background: {background}.\n"
    ),
}


def background_description(background_type: str) -> str:
    """Return the fixed background description for *background_type*.

    Args:
        background_type: One of ``solid``, ``logo`` or ``showroom``

    Returns:
        Background description substituted into every shot prompt

    Raises:
        UnknownBackgroundError: If the background type is not in the table
    """
    try:
        return _BACKGROUND_PROMPTS[background_type]
    except (KeyError, TypeError):
        raise UnknownBackgroundError(
            f"Unknown background type: {background_type!r} "
            f"(expected one of {', '.join(BACKGROUND_TYPES)})"
        ) from None


def build_shot_prompt(shot: str, background_type: str) -> str:
    """Compile the prompt for one shot.

    Args:
        shot: One of ``front``, ``side`` or ``full``
        background_type: One of ``solid``, ``logo`` or ``showroom``

    Returns:
        Complete prompt text for the shot

    Raises:
        KeyError: If the shot type is unknown
        UnknownBackgroundError: If the background type is unknown
    """
    background = background_description(background_type)
    if shot not in _SHOT_TEMPLATES:
        raise KeyError(f"Unknown shot type: {shot!r}")

    head = _SHOT_TEMPLATES[shot].format(background=background)
    return "\n".join([head.rstrip("\n"), _LIGHTING_DIRECTIVE, _STYLE_DIRECTIVE, _LIKENESS_DIRECTIVE])


def build_all_prompts(background_type: str) -> dict[str, str]:
    """Compile the prompts for all three shots, keyed by shot type."""
    return {shot: build_shot_prompt(shot, background_type) for shot in SHOT_TYPES}
