"""Synthetic analysis results used when the external services are unavailable."""

from __future__ import annotations

import random

from stylefinder.catalog.colors import PALETTE
from stylefinder.catalog.taxonomy import CATEGORY, PATTERN, STYLE
from stylefinder.models import AnalysisResult, ClothingAttributes, Product
from stylefinder.search.normalizer import DEFAULT_CURRENCY, placeholder_image_url, synthetic_name
from stylefinder.search.ranking import DEFAULT_POLICY, SimilarityPolicy

RETAILERS = ("Zara", "H&M", "Mango", "Uniqlo", "Asos", "Zalando", "Bershka", "Pull & Bear")
MOCK_PRODUCT_URL = "https://example.com/product"


class MockResultGenerator:
    """Builds a complete, plausible ``AnalysisResult`` from a random source."""

    def __init__(
        self,
        rng: random.Random | None = None,
        product_count: int = 8,
        policy: SimilarityPolicy = DEFAULT_POLICY,
    ) -> None:
        self._rng = rng or random.Random()
        self._product_count = max(1, product_count)
        self._policy = policy

    def attributes(self) -> ClothingAttributes:
        color_name, color_hex = self._rng.choice(PALETTE)
        return ClothingAttributes(
            category=self._rng.choice(CATEGORY.values),
            pattern=self._rng.choice((PATTERN.default, *PATTERN.values)),
            style=self._rng.choice(STYLE.values),
            color_hex=color_hex.lower(),
            color_name=color_name,
        )

    def products(self, attributes: ClothingAttributes) -> list[Product]:
        products: list[Product] = []
        for rank in range(self._product_count):
            retailer = RETAILERS[rank % len(RETAILERS)]
            products.append(
                Product(
                    id=f"mock-{rank}-{self._rng.getrandbits(48):012x}",
                    name=synthetic_name(attributes),
                    brand=retailer,
                    price=round(self._rng.randint(0, 49) + 19.99, 2),
                    currency=DEFAULT_CURRENCY,
                    image_url=placeholder_image_url(attributes),
                    product_url=MOCK_PRODUCT_URL,
                    source=retailer,
                    similarity=self._policy.score(rank),
                )
            )
        return products

    def generate(self) -> AnalysisResult:
        attributes = self.attributes()
        return AnalysisResult(attributes=attributes, products=self.products(attributes), fallback_used=True)
