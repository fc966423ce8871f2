"""Garment attribute extraction: colour naming and keyword taxonomies."""

from .classifier import AttributeClassifier, classify_labels, dominant_color
from .colors import PALETTE, PALETTE_NAMES, InvalidColorFormat, color_name, hex_to_rgb, rgb_to_hex
from .taxonomy import CATEGORY, PATTERN, STYLE, Taxonomy

__all__ = [
    "AttributeClassifier",
    "CATEGORY",
    "InvalidColorFormat",
    "PALETTE",
    "PALETTE_NAMES",
    "PATTERN",
    "STYLE",
    "Taxonomy",
    "classify_labels",
    "color_name",
    "dominant_color",
    "hex_to_rgb",
    "rgb_to_hex",
]
