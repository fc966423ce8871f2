"""Image normalisation helpers."""

from __future__ import annotations

import logging
from io import BytesIO

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)


def probe_image(size: int = 8) -> bytes:
    """Small solid white PNG used for connectivity checks."""

    buffer = BytesIO()
    Image.new("RGB", (size, size), color=(255, 255, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


class ImageNormalizer:
    """Ensures consistent orientation and a bounded size before the vision call."""

    def __init__(self, max_side: int = 1600, quality: int = 90) -> None:
        self._max_side = max_side
        self._quality = quality

    def normalize(self, image_bytes: bytes) -> bytes:
        """
        Return JPEG bytes, EXIF-rotated, RGB, longest side at most ``max_side``.

        Bytes Pillow cannot decode are returned unchanged and left for the
        vision service to accept or reject.
        """

        try:
            with Image.open(BytesIO(image_bytes)) as img:
                img = ImageOps.exif_transpose(img)
                img = img.convert("RGB")
                img.thumbnail((self._max_side, self._max_side))
                buffer = BytesIO()
                img.save(buffer, format="JPEG", quality=self._quality)
        except (UnidentifiedImageError, OSError) as exc:
            logger.warning("Could not decode uploaded image (%s); forwarding original bytes.", exc)
            return image_bytes
        return buffer.getvalue()
