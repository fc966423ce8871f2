"""Tests for search result normalisation and ranking."""

from __future__ import annotations

import random
from typing import Any

import pytest

from stylefinder.models import ClothingAttributes
from stylefinder.search.normalizer import (
    ResultNormalizer,
    display_source,
    parse_structured_price,
    parse_text_price,
    split_brand,
)
from stylefinder.search.ranking import SimilarityPolicy

ATTRIBUTES = ClothingAttributes(category="robe", pattern="fleuri", style="élégant", color_name="rouge")


def _normalize(items: list[dict[str, Any]], seed: int = 1):
    return ResultNormalizer(rng=random.Random(seed)).normalize(items, ATTRIBUTES)


def test_three_ranked_items(raw_items: list[dict[str, Any]]) -> None:
    products = _normalize(raw_items)

    assert [p.product_url for p in products] == [item["link"] for item in raw_items]
    s0, s1, s2 = (p.similarity for p in products)
    assert s0 > s1 > s2
    assert all(0.35 <= s <= 0.95 for s in (s0, s1, s2))


def test_structured_offer_price_and_title_brand(raw_items: list[dict[str, Any]]) -> None:
    product = _normalize(raw_items)[0]

    assert product.price == 39.95
    assert product.currency == "€"
    assert product.brand == "Zara"
    assert product.name == "Robe fleurie mi-longue"
    assert product.image_url == "https://static.zara.net/robe.jpg"
    assert product.source == "Zara"


def test_price_parsed_from_snippet(raw_items: list[dict[str, Any]]) -> None:
    product = _normalize(raw_items)[1]

    assert product.price == 24.5
    assert product.currency == "£"
    assert product.brand == "ASOS"
    assert product.name == "Floral Midi Dress"
    assert product.image_url == "https://images.asos.com/thumb.jpg"
    assert product.source == "Asos"


def test_bare_item_gets_synthetic_values(raw_items: list[dict[str, Any]]) -> None:
    product = _normalize(raw_items)[2]

    assert 19.99 <= product.price <= 68.99
    assert product.currency == "€"
    assert product.brand == "Marque inconnue"
    assert product.name == "Robe"
    assert product.image_url == "https://source.unsplash.com/random/300x400?robe,rouge"
    assert product.source == "Shop"


def test_structured_product_brand_wins() -> None:
    item = {
        "title": "Robe portefeuille - Collection été",
        "displayLink": "www.mango.com",
        "pagemap": {"product": [{"brand": "Mango", "price": "$59.00", "image": "https://m.example/img.jpg"}]},
    }

    product = _normalize([item])[0]

    assert product.brand == "Mango"
    assert product.name == "Robe portefeuille - Collection été"
    assert (product.price, product.currency) == (59.0, "$")
    assert product.image_url == "https://m.example/img.jpg"


def test_missing_title_uses_attribute_name() -> None:
    product = _normalize([{}])[0]

    assert product.name == "élégant robe fleuri rouge".capitalize()
    assert product.brand == "Marque inconnue"
    assert product.source == "Google Shopping"
    assert product.product_url == ""


def test_output_length_matches_input_and_ids_are_unique() -> None:
    items = [{"title": f"Brand{i} item", "link": f"https://x.test/{i}"} for i in range(12)]

    products = _normalize(items)

    assert len(products) == len(items)
    assert len({p.id for p in products}) == len(items)
    assert all(p.price >= 0 for p in products)


def test_similarity_is_non_increasing_and_clamped() -> None:
    items = [{"title": "A b"} for _ in range(20)]

    scores = [p.similarity for p in _normalize(items)]

    assert scores == sorted(scores, reverse=True)
    assert scores[0] == 0.95
    assert min(scores) == 0.35


def test_same_seed_gives_same_ids() -> None:
    items = [{"title": "Brand item"}]

    assert _normalize(items, seed=3)[0].id == _normalize(items, seed=3)[0].id


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Robe rouge 29,99 €", (29.99, "€")),
        ("Only $15", (15.0, "$")),
        ("¥ 3200 livraison", (3200.0, "¥")),
        ("Manteau en cachemire €1,299.00", (1299.0, "€")),
        ("Sac 1.299,00 €", (1299.0, "€")),
        ("Parka 1\u202f049,90 €", (1049.9, "€")),
        ("no price here", None),
    ],
)
def test_parse_text_price(text: str, expected: tuple[float, str] | None) -> None:
    assert parse_text_price(text) == expected


def test_structured_price_without_symbol_uses_currency_code() -> None:
    assert parse_structured_price({"price": "120.00", "pricecurrency": "USD"}) == (120.0, "$")
    assert parse_structured_price({"price": ""}) is None


@pytest.mark.parametrize(
    ("entry", "expected"),
    [
        ({"price": "1,299.50", "pricecurrency": "USD"}, (1299.5, "$")),
        ({"price": "1.299,00", "pricecurrency": "EUR"}, (1299.0, "€")),
        ({"price": "89.9"}, (89.9, "€")),
    ],
)
def test_structured_price_with_grouping(entry: dict[str, str], expected: tuple[float, str]) -> None:
    assert parse_structured_price(entry) == expected


def test_zero_structured_price_falls_through_to_snippet() -> None:
    item = {
        "title": "Pull col roulé",
        "snippet": "Prix : 45,00 €",
        "pagemap": {"offer": [{"price": "0.00", "pricecurrency": "EUR"}]},
    }

    product = _normalize([item])[0]

    assert (product.price, product.currency) == (45.0, "€")


def test_zero_price_everywhere_is_synthesized() -> None:
    item = {"title": "Pull col roulé", "pagemap": {"product": [{"price": "0"}]}}

    product = _normalize([item])[0]

    assert 19.99 <= product.price <= 68.99
    assert product.currency == "€"


def test_product_to_dict_uses_public_keys(raw_items: list[dict[str, Any]]) -> None:
    product = _normalize(raw_items)[0]

    data = product.to_dict()

    assert list(data) == [
        "id",
        "name",
        "brand",
        "price",
        "currency",
        "imageUrl",
        "productUrl",
        "source",
        "similarity",
    ]
    assert data["imageUrl"] == product.image_url
    assert data["productUrl"] == product.product_url


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Levi's - 501 Original", ("Levi's", "501 Original")),
        ("Uniqlo | Pull en laine", ("Uniqlo", "Pull en laine")),
        ("Sandro : Robe courte", ("Sandro", "Robe courte")),
        ("Sézane – Chemise Max", ("Sézane", "Chemise Max")),
        ("Mango Veste en jean", ("Mango", "Veste en jean")),
        ("Robe", ("Marque inconnue", "Robe")),
        ("Zara | Robe midi - rouge", ("Zara", "Robe midi - rouge")),
        ("Robe midi - rouge | Zara", ("Robe midi", "rouge | Zara")),
    ],
)
def test_split_brand(title: str, expected: tuple[str, str]) -> None:
    assert split_brand(title) == expected


@pytest.mark.parametrize(
    ("link", "expected"),
    [
        ("www.zalando.fr", "Zalando"),
        ("laredoute.fr", "Laredoute"),
        ("", "Google Shopping"),
        (None, "Google Shopping"),
    ],
)
def test_display_source(link: str | None, expected: str) -> None:
    assert display_source(link) == expected


def test_policy_floor_and_base() -> None:
    policy = SimilarityPolicy(base=0.9, step=0.1, floor=0.5)

    assert [policy.score(rank) for rank in range(7)] == [0.9, 0.8, 0.7, 0.6, 0.5, 0.5, 0.5]
