"""Image preprocessing utilities."""

from .normalize import ImageNormalizer, probe_image

__all__ = ["ImageNormalizer", "probe_image"]
