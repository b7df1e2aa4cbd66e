"""Inline image payload helpers.

Images travel through the studio as self-contained ``data:`` URLs
(``data:image/png;base64,...``): uploaded source photos, the generated
portraits, the history records and the cache all use the same text form.
These helpers convert between that form, raw bytes, files on disk and
PIL images.
"""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
import re
from io import BytesIO
from pathlib import Path

from PIL import Image

from .errors import SourceImageError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^;,]*)*),(?P<data>.*)$", re.S)

# Characters that are unsafe in download file names on common filesystems.
_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\s]+')


def parse_data_url(payload: str) -> tuple[str, bytes]:
    """Decode an inline image payload into ``(mime_type, raw_bytes)``.

    Bare base64 text without a ``data:`` header is accepted and treated as
    PNG.

    Args:
        payload: ``data:`` URL or bare base64 string

    Returns:
        Tuple of (mime type, decoded bytes)

    Raises:
        SourceImageError: If the payload is empty or not valid base64
    """
    if not payload or not isinstance(payload, str):
        raise SourceImageError("Image payload is empty")

    mime_type = DEFAULT_MIME_TYPE
    data = payload.strip()

    match = _DATA_URL_RE.match(data)
    if match:
        mime_type = match.group("mime") or DEFAULT_MIME_TYPE
        if ";base64" not in (match.group("params") or ""):
            raise SourceImageError("Only base64-encoded data URLs are supported")
        data = match.group("data")

    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SourceImageError(f"Invalid base64 image payload: {e}") from e

    if not raw:
        raise SourceImageError("Image payload is empty")

    return mime_type, raw


def to_data_url(data: bytes | str, mime_type: str | None = None) -> str:
    """Encode image bytes as a ``data:`` URL.

    Args:
        data: Raw bytes, or text that is already base64-encoded
        mime_type: Image MIME type (defaults to PNG)

    Returns:
        ``data:<mime>;base64,<payload>`` string
    """
    if isinstance(data, bytes):
        encoded = base64.b64encode(data).decode("ascii")
    else:
        encoded = data
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{encoded}"


def file_to_data_url(path: str | Path) -> str:
    """Read an image file and return it as a ``data:`` URL.

    Raises:
        SourceImageError: If the file cannot be read
    """
    path = Path(path)
    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type or not mime_type.startswith("image/"):
        mime_type = DEFAULT_MIME_TYPE

    try:
        data = path.read_bytes()
    except OSError as e:
        raise SourceImageError(f"Cannot read image {path.name}: {e}") from e

    return to_data_url(data, mime_type)


def data_url_to_image(payload: str) -> Image.Image:
    """Decode a ``data:`` URL into a PIL image."""
    _, raw = parse_data_url(payload)
    image = Image.open(BytesIO(raw))
    image.load()
    return image


def extension_for(mime_type: str) -> str:
    """Map an image MIME type to a file extension (``png`` when unknown)."""
    if "/" in mime_type:
        subtype = mime_type.split("/", 1)[1].lower()
        if subtype == "jpeg":
            return "jpg"
        if subtype in ("png", "jpg", "webp", "gif"):
            return subtype
    return "png"


def download_filename(name: str, shot: str, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Build the download file name for one portrait: ``{name}_{shot}.{ext}``."""
    safe_name = _UNSAFE_FILENAME_CHARS.sub("_", (name or "").strip()) or "portrait"
    return f"{safe_name}_{shot}.{extension_for(mime_type)}"


def save_portrait(payload: str, name: str, shot: str, output_dir: Path) -> Path:
    """Write a generated portrait to *output_dir* for download.

    Args:
        payload: ``data:`` URL of the portrait
        name: Sales representative's name, used in the file name
        shot: Shot type ("front", "side" or "full")
        output_dir: Target directory (created if missing)

    Returns:
        Path of the written file
    """
    mime_type, raw = parse_data_url(payload)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    filepath = output_dir / download_filename(name, shot, mime_type)
    filepath.write_bytes(raw)
    logger.debug(f"Saved {shot} portrait to {filepath}")
    return filepath
