"""Turns raw vision output into normalised garment attributes."""

from __future__ import annotations

from typing import Iterable, Sequence

from stylefinder.catalog.colors import color_name, rgb_to_hex
from stylefinder.catalog.taxonomy import CATEGORY, PATTERN, STYLE
from stylefinder.models import ClothingAttributes, DominantColor, RawVisionOutput


def classify_labels(labels: Iterable[str]) -> tuple[str, str, str]:
    """Return the ``(category, pattern, style)`` triple for the given labels."""

    materialised = list(labels)
    return CATEGORY.match(materialised), PATTERN.match(materialised), STYLE.match(materialised)


def dominant_color(colors: Sequence[DominantColor]) -> DominantColor | None:
    """Pick the highest-scored colour; the earliest entry wins on equal scores."""

    best: DominantColor | None = None
    for entry in colors:
        if best is None or entry.score > best.score:
            best = entry
    return best


class AttributeClassifier:
    """Maps labels and dominant colours to ``ClothingAttributes``."""

    def classify(self, vision: RawVisionOutput) -> ClothingAttributes:
        category, pattern, style = classify_labels(vision.label_texts())
        main = dominant_color(vision.colors)
        if main is None:
            return ClothingAttributes(category=category, pattern=pattern, style=style)

        return ClothingAttributes(
            category=category,
            pattern=pattern,
            style=style,
            color_hex=rgb_to_hex(*main.rgb),
            color_name=color_name(main.rgb),
        )
