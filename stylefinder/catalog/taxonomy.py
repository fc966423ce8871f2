"""Keyword tables mapping free-text labels to canonical garment attributes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from stylefinder.models import DEFAULT_CATEGORY, DEFAULT_PATTERN, DEFAULT_STYLE


@dataclass(frozen=True, slots=True)
class Taxonomy:
    """Ordered ``canonical value -> keywords`` table with a default value.

    Rules are tried in declaration order; the first rule having any keyword
    contained in any label wins, whatever the order of the labels. Labels
    containing one of a rule's ``exclusions`` are ignored by that rule only.
    """

    name: str
    rules: Mapping[str, tuple[str, ...]]
    default: str
    exclusions: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def match(self, labels: Iterable[str]) -> str:
        lowered = [label.lower() for label in labels if label]
        for value, keywords in self.rules.items():
            excluded = self.exclusions.get(value, ())
            candidates = [label for label in lowered if not any(phrase in label for phrase in excluded)]
            if any(keyword in label for keyword in keywords for label in candidates):
                return value
        return self.default

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(self.rules)


CATEGORY = Taxonomy(
    name="category",
    rules={
        "t-shirt": ("t-shirt", "tee-shirt", "tee shirt"),
        "robe": ("dress", "gown", "robe"),
        "pantalon": ("pantalon", "jeans", "denim", "pants", "trousers", "leggings"),
        # before "chemise": "sweatshirt" contains "shirt"
        "pull": ("sweater", "pullover", "sweatshirt", "hoodie", "cardigan", "pull"),
        "chemise": ("chemise", "shirt", "blouse"),
        "veste": ("veste", "jacket", "blazer", "outerwear"),
        "manteau": ("manteau", "coat", "trench"),
        "jupe": ("jupe", "skirt"),
        "short": ("shorts", "short"),
    },
    default=DEFAULT_CATEGORY,
    exclusions={"robe": ("dress shirt",)},
)

PATTERN = Taxonomy(
    name="pattern",
    rules={
        "rayé": ("stripes", "striped", "stripe", "rayé", "rayures"),
        "à pois": ("polka dot", "dots", "spotted", "pois"),
        "à carreaux": ("checkered", "checked", "plaid", "tartan", "gingham", "carreaux"),
        "fleuri": ("floral", "flower", "fleuri"),
        "imprimé": ("print", "printed", "imprimé", "pattern", "motif"),
    },
    default=DEFAULT_PATTERN,
)

STYLE = Taxonomy(
    name="style",
    rules={
        "décontracté": ("casual", "décontracté"),
        "élégant": ("formal", "business", "elegant", "formel", "élégant", "chic"),
        "sportif": ("sport", "athletic", "sportif", "activewear"),
        "vintage": ("vintage", "retro", "rétro"),
        "bohème": ("bohemian", "boho", "bohème"),
    },
    default=DEFAULT_STYLE,
)

TAXONOMIES = (CATEGORY, PATTERN, STYLE)
