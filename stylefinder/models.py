"""Data models shared by the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

DEFAULT_CATEGORY = "vêtement"
DEFAULT_PATTERN = "uni"
DEFAULT_STYLE = "décontracté"
DEFAULT_COLOR_HEX = "#000000"
DEFAULT_COLOR_NAME = "noir"


@dataclass(frozen=True, slots=True)
class LabelAnnotation:
    """Free-text label detected by the vision service."""

    description: str
    score: float = 0.0


@dataclass(frozen=True, slots=True)
class DominantColor:
    """Dominant colour entry reported by the vision service."""

    red: int
    green: int
    blue: int
    score: float = 0.0
    pixel_fraction: float = 0.0

    @property
    def rgb(self) -> tuple[int, int, int]:
        return self.red, self.green, self.blue


@dataclass(frozen=True, slots=True)
class WebEntity:
    """Web entity guessed by the vision service from similar images online."""

    description: str
    score: float = 0.0


@dataclass(frozen=True, slots=True)
class RawVisionOutput:
    """Everything the vision service told us about one image."""

    labels: tuple[LabelAnnotation, ...] = ()
    colors: tuple[DominantColor, ...] = ()
    web_entities: tuple[WebEntity, ...] = ()

    def label_texts(self) -> list[str]:
        """Return label and web entity descriptions, lower-cased, in API order."""

        texts = [label.description for label in self.labels]
        texts.extend(entity.description for entity in self.web_entities)
        return [text.lower() for text in texts if text]


@dataclass(frozen=True, slots=True)
class ClothingAttributes:
    """Normalised garment attributes; every field always has a value."""

    category: str = DEFAULT_CATEGORY
    pattern: str = DEFAULT_PATTERN
    style: str = DEFAULT_STYLE
    color_hex: str = DEFAULT_COLOR_HEX
    color_name: str = DEFAULT_COLOR_NAME

    def to_dict(self) -> Dict[str, str]:
        return {
            "color": self.color_hex,
            "colorName": self.color_name,
            "category": self.category,
            "pattern": self.pattern,
            "style": self.style,
        }


@dataclass(frozen=True, slots=True)
class Product:
    """Purchasable product matched to the analysed garment."""

    id: str
    name: str
    brand: str
    price: float
    currency: str
    image_url: str
    product_url: str
    source: str
    similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "price": self.price,
            "currency": self.currency,
            "imageUrl": self.image_url,
            "productUrl": self.product_url,
            "source": self.source,
            "similarity": self.similarity,
        }


@dataclass(slots=True)
class AnalysisResult:
    """Attributes plus ranked products returned for one uploaded image."""

    attributes: ClothingAttributes
    products: list[Product] = field(default_factory=list)
    fallback_used: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the public JSON shape; ``fallback_used`` stays internal."""

        return {
            "attributes": self.attributes.to_dict(),
            "products": [product.to_dict() for product in self.products],
        }
