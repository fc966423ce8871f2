"""Shared fixtures for the StyleFinder test-suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

import pytest

from stylefinder.config.settings import Settings
from stylefinder.models import DominantColor, LabelAnnotation, RawVisionOutput


class StubVision:
    """Vision double returning a fixed output or raising a fixed error."""

    def __init__(self, output: RawVisionOutput | None = None, error: Exception | None = None) -> None:
        self.output = output or RawVisionOutput()
        self.error = error
        self.calls: list[bytes] = []

    async def analyze(self, image_bytes: bytes) -> RawVisionOutput:
        self.calls.append(image_bytes)
        if self.error:
            raise self.error
        return self.output


class StubSearch:
    """Search double returning fixed items or raising a fixed error."""

    def __init__(self, items: Sequence[Mapping[str, Any]] = (), error: Exception | None = None) -> None:
        self.items = list(items)
        self.error = error
        self.queries: list[tuple[str, int]] = []

    async def search(self, query: str, count: int) -> list[Mapping[str, Any]]:
        self.queries.append((query, count))
        if self.error:
            raise self.error
        return self.items


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        vision_api_key="test-vision",
        search_api_key="test-search",
        search_engine_id="test-cx",
        vision_base_url="https://vision.test/v1",
        search_base_url="https://search.test/customsearch/v1",
        upload_dir=str(tmp_path / "uploads"),
        max_retries=0,
        retry_backoff=0.0,
        fallback_seed=7,
    )


@pytest.fixture
def dress_vision() -> RawVisionOutput:
    return RawVisionOutput(
        labels=(
            LabelAnnotation("Red dress", 0.97),
            LabelAnnotation("Floral pattern", 0.91),
            LabelAnnotation("Elegant", 0.80),
        ),
        colors=(
            DominantColor(red=30, green=30, blue=30, score=0.2, pixel_fraction=0.3),
            DominantColor(red=220, green=20, blue=30, score=0.6, pixel_fraction=0.4),
        ),
    )


@pytest.fixture
def raw_items() -> list[dict[str, Any]]:
    return [
        {
            "title": "Zara - Robe fleurie mi-longue",
            "link": "https://www.zara.com/fr/robe-fleurie.html",
            "displayLink": "www.zara.com",
            "snippet": "Robe fleurie à manches courtes.",
            "pagemap": {
                "offer": [{"price": "39,95", "pricecurrency": "EUR"}],
                "cse_image": [{"src": "https://static.zara.net/robe.jpg"}],
            },
        },
        {
            "title": "ASOS | Floral Midi Dress",
            "link": "https://www.asos.com/fr/floral-midi-dress",
            "displayLink": "www.asos.com",
            "snippet": "Now only £24.50 with free delivery.",
            "pagemap": {"cse_thumbnail": [{"src": "https://images.asos.com/thumb.jpg"}]},
        },
        {
            "title": "Robe",
            "link": "https://shop.example.fr/robe",
            "displayLink": "shop.example.fr",
        },
    ]
