"""Gemini-backed portrait generation.

:class:`GenerationClient` turns 1-3 source photos into three corporate
portraits (front, 45-degree side, full body).  One request is sent per shot;
each request carries every source image as an inline part followed by the
shot prompt from :mod:`photostudio.core.prompt_builder`.

Concurrency
-----------
The three shot requests are independent and run concurrently on the event
loop.  They are joined with fail-fast semantics: the call returns only when
all three succeed, and the first failure propagates immediately.  Sibling
requests still in flight at that point are abandoned, never awaited, and
their results are discarded.  No partial (two-of-three) result is ever
returned and nothing is retried.

Credential Handling
-------------------
The API key is injected at construction.  A missing key is reported as
:class:`~photostudio.core.errors.ConfigurationError` when ``generate`` is
called, before the SDK client is built and before any network traffic.

Usage Example
-------------
    from photostudio.core.config import config
    from photostudio.core.generation_client import GenerationClient

    client = GenerationClient(api_key=config.gemini_api_key, model=config.gemini_model)
    portraits = await client.generate([data_url], "solid", "Kim")
    portraits.front  # "data:image/png;base64,..."
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from google import genai
from google.genai import types

from .errors import (
    ConfigurationError,
    NoCandidateError,
    NoImageDataError,
    SourceImageError,
    UpstreamError,
)
from .images import parse_data_url, to_data_url
from .prompt_builder import SHOT_TYPES, build_all_prompts

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash-image"
MAX_SOURCE_IMAGES = 3


@dataclass
class GeneratedPortraits:
    """The three portraits produced by one generation, as ``data:`` URLs."""

    front: str
    side: str
    full: str

    def as_dict(self) -> dict[str, str]:
        """Return the portraits keyed by shot type."""
        return {"front": self.front, "side": self.side, "full": self.full}


class GenerationClient:
    """Generate the three portrait shots through the Gemini API.

    Args:
        api_key: Gemini API credential (None or blank means not configured)
        model: Gemini image model name
        client: Pre-built SDK client; anything exposing
            ``aio.models.generate_content`` works.  When omitted, a
            ``google.genai.Client`` is created on first use.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        client: Any | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def is_configured(self) -> bool:
        """Whether a credential is available."""
        return bool(self.api_key and self.api_key.strip())

    def _get_client(self) -> Any:
        if self._client is None:
            logger.info(f"Creating Gemini client for model {self.model}")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(
        self,
        source_images: list[str],
        background_type: str,
        name: str = "",
    ) -> GeneratedPortraits:
        """Generate front, side and full-body portraits.

        Args:
            source_images: 1-3 inline image payloads (``data:`` URLs)
            background_type: ``solid``, ``logo`` or ``showroom``
            name: Person's name, used for logging only

        Returns:
            GeneratedPortraits with one payload per shot

        Raises:
            ConfigurationError: If no API key is configured
            UnknownBackgroundError: If the background type is unknown
            SourceImageError: If the source images are missing, too many,
                or not decodable
            NoCandidateError: If a shot response has no candidates
            NoImageDataError: If a shot candidate has no inline image
            UpstreamError: If a shot request fails at the network/service level
        """
        if not self.is_configured:
            logger.error("Gemini API key is missing; refusing to generate.")
            raise ConfigurationError()

        # Validate everything before the first request goes out.
        prompts = build_all_prompts(background_type)
        image_parts = self._build_image_parts(source_images)

        logger.info(
            f"Generating {len(SHOT_TYPES)} shots for {name or '(unnamed)'} "
            f"with {len(image_parts)} source image(s), background={background_type}"
        )

        client = self._get_client()
        front, side, full = await asyncio.gather(
            *(self._generate_shot(client, shot, prompts[shot], image_parts) for shot in SHOT_TYPES)
        )

        logger.info(f"Generated all shots for {name or '(unnamed)'}")
        return GeneratedPortraits(front=front, side=side, full=full)

    def _build_image_parts(self, source_images: list[str]) -> list[types.Part]:
        """Decode source payloads into SDK inline-data parts.

        Raises:
            SourceImageError: If there are not 1-3 valid payloads
        """
        if not source_images:
            raise SourceImageError("At least one source image is required")
        if len(source_images) > MAX_SOURCE_IMAGES:
            raise SourceImageError(
                f"At most {MAX_SOURCE_IMAGES} source images are allowed, got {len(source_images)}"
            )

        parts = []
        for payload in source_images:
            mime_type, raw = parse_data_url(payload)
            parts.append(types.Part.from_bytes(data=raw, mime_type=mime_type))
        return parts

    async def _generate_shot(
        self,
        client: Any,
        shot: str,
        prompt: str,
        image_parts: list[types.Part],
    ) -> str:
        """Run one shot request and extract its image.

        Returns:
            ``data:`` URL of the first inline image of the first candidate
        """
        contents = [*image_parts, prompt]

        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=contents,
            )
        except Exception as e:
            logger.error(f"Error generating {shot} shot: {e}")
            raise UpstreamError(f"Generation request failed for {shot} shot: {e}", shot=shot) from e

        return _extract_image(response, shot)


def _extract_image(response: Any, shot: str) -> str:
    """Pull the first inline image out of the first candidate.

    Raises:
        NoCandidateError: If the response has no candidates
        NoImageDataError: If the first candidate has no inline image part
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        logger.error(f"No candidates returned for {shot} shot")
        raise NoCandidateError("No candidates returned from AI", shot=shot)

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []

    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and inline_data.data:
            return to_data_url(inline_data.data, inline_data.mime_type or "image/png")

    logger.error(f"No image data found in {shot} shot response")
    raise NoImageDataError("No image data found in response", shot=shot)
