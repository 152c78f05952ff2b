from __future__ import annotations
import io
from typing import Optional

from PIL import Image, UnidentifiedImageError

GENERIC_TYPES = {"", "application/octet-stream"}


def sniff_image_type(data: bytes) -> Optional[str]:
    """Return the MIME type Pillow detects for ``data``, or None if it is not an image."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        return None


def preview_content_type(data: bytes, declared: Optional[str]) -> str:
    """Content type to serve a picked file back with; trusts the upload unless it is generic."""
    declared = (declared or "").lower()
    if declared not in GENERIC_TYPES:
        return declared
    return sniff_image_type(data) or "application/octet-stream"
