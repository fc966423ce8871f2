"""Search query construction from garment attributes."""

from __future__ import annotations

from stylefinder.catalog.taxonomy import PATTERN, STYLE
from stylefinder.models import ClothingAttributes

LOCALE_AUGMENTATION = {
    "fr": "acheter vêtement",
    "en": "buy clothing",
}
DEFAULT_LOCALE = "fr"


class QueryBuilder:
    """Builds the shopping query sent to the search service."""

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        self._augmentation = LOCALE_AUGMENTATION.get(
            locale.lower(),
            LOCALE_AUGMENTATION[DEFAULT_LOCALE],
        )

    def build(self, attributes: ClothingAttributes) -> str:
        """Return ``<color> <category>[ <pattern>][ <style>] <augmentation>``."""

        parts = [attributes.color_name, attributes.category]
        if attributes.pattern != PATTERN.default:
            parts.append(attributes.pattern)
        if attributes.style != STYLE.default:
            parts.append(attributes.style)
        parts.append(self._augmentation)
        return " ".join(" ".join(part for part in parts if part).split())
