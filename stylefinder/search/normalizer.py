"""Normalisation of raw search results into ranked products."""

from __future__ import annotations

import random
import re
from typing import Any, Mapping, Sequence
from urllib.parse import quote

from stylefinder.models import ClothingAttributes, Product
from stylefinder.search.ranking import DEFAULT_POLICY, SimilarityPolicy

UNKNOWN_BRAND = "Marque inconnue"
DEFAULT_SOURCE = "Google Shopping"
DEFAULT_CURRENCY = "€"
TITLE_SEPARATORS = (" - ", " | ", " : ", " – ", " — ")
CURRENCY_CODES = {"EUR": "€", "USD": "$", "GBP": "£", "JPY": "¥", "CNY": "¥"}

_AMOUNT = r"\d{1,3}(?:[.,\u00a0\u202f]\d{3})+(?:[.,]\d{1,2})?|\d+(?:[.,]\d{1,2})?"
_SYMBOL_FIRST = re.compile(rf"([€$£¥])\s*({_AMOUNT})")
_SYMBOL_LAST = re.compile(rf"({_AMOUNT})\s*([€$£¥])")
_ANY_AMOUNT = re.compile(r"\d+(?:[.,\u00a0\u202f]\d+)*")
_ANY_SYMBOL = re.compile(r"[€$£¥]")


def placeholder_image_url(attributes: ClothingAttributes) -> str:
    """Stock-photo URL used when a result ships without any image."""

    return "https://source.unsplash.com/random/300x400?{},{}".format(
        quote(attributes.category),
        quote(attributes.color_name),
    )


def synthetic_name(attributes: ClothingAttributes) -> str:
    name = f"{attributes.style} {attributes.category} {attributes.pattern} {attributes.color_name}"
    return name[:1].upper() + name[1:]


def _first(pagemap: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    entries = pagemap.get(key)
    if isinstance(entries, list) and entries and isinstance(entries[0], Mapping):
        return entries[0]
    return {}


def _to_amount(raw: str) -> float:
    """``1.299,00`` and ``1,299.00`` -> ``1299.0``; a trailing 1-2 digit group is the decimal part."""

    digits = re.sub(r"\s", "", raw)
    position = max(digits.rfind("."), digits.rfind(","))
    fraction = ""
    if position != -1 and len(digits) - position - 1 <= 2:
        digits, fraction = digits[:position], digits[position + 1 :]
    whole = digits.replace(".", "").replace(",", "")
    return float(f"{whole}.{fraction}" if fraction else whole)


def parse_structured_price(entry: Mapping[str, Any]) -> tuple[float, str] | None:
    """Read ``price`` (and ``pricecurrency``) from a pagemap offer or product entry."""

    raw_price = entry.get("price")
    if raw_price in (None, ""):
        return None
    text = str(raw_price)
    amount = _ANY_AMOUNT.search(text)
    if not amount:
        return None

    symbol = _ANY_SYMBOL.search(text)
    if symbol:
        currency = symbol.group(0)
    else:
        code = str(entry.get("pricecurrency", "")).upper()
        currency = CURRENCY_CODES.get(code, DEFAULT_CURRENCY)
    return _to_amount(amount.group(0)), currency


def parse_text_price(text: str) -> tuple[float, str] | None:
    """Find a ``€12,99`` / ``12.99 $`` style price in free text."""

    match = _SYMBOL_FIRST.search(text)
    if match:
        return _to_amount(match.group(2)), match.group(1)
    match = _SYMBOL_LAST.search(text)
    if match:
        return _to_amount(match.group(1)), match.group(2)
    return None


def split_brand(title: str) -> tuple[str, str]:
    """Split a result title into ``(brand, name)``."""

    cleaned = title.strip()
    present = [separator for separator in TITLE_SEPARATORS if separator in cleaned]
    if present:
        # earliest in the title; declaration order breaks ties
        separator = min(present, key=cleaned.find)
        brand, name = cleaned.split(separator, 1)
        if brand.strip() and name.strip():
            return brand.strip(), name.strip()

    tokens = cleaned.split(None, 1)
    if len(tokens) == 2:
        return tokens[0], tokens[1]
    return UNKNOWN_BRAND, cleaned


def display_source(display_link: str | None) -> str:
    """``www.zalando.fr`` -> ``Zalando``."""

    if not display_link:
        return DEFAULT_SOURCE
    host = display_link.strip().lower()
    host = host.split("://", 1)[-1].split("/", 1)[0]
    host = host.removeprefix("www.")
    label = host.split(".", 1)[0]
    if not label:
        return DEFAULT_SOURCE
    return label[:1].upper() + label[1:]


class ResultNormalizer:
    """Maps raw search items to ``Product`` records, one per item, in rank order."""

    def __init__(
        self,
        rng: random.Random | None = None,
        policy: SimilarityPolicy = DEFAULT_POLICY,
        id_prefix: str = "google",
    ) -> None:
        self._rng = rng or random.Random()
        self._policy = policy
        self._id_prefix = id_prefix

    def normalize(
        self,
        items: Sequence[Mapping[str, Any]],
        attributes: ClothingAttributes,
    ) -> list[Product]:
        return [self._to_product(rank, item, attributes) for rank, item in enumerate(items)]

    def _to_product(
        self,
        rank: int,
        item: Mapping[str, Any],
        attributes: ClothingAttributes,
    ) -> Product:
        pagemap = item.get("pagemap") if isinstance(item.get("pagemap"), Mapping) else {}
        title = str(item.get("title") or "").strip()
        price, currency = self._price(item, pagemap)
        brand, name = self._brand_and_name(title, pagemap, attributes)

        return Product(
            id=f"{self._id_prefix}-{rank}-{self._rng.getrandbits(48):012x}",
            name=name,
            brand=brand,
            price=price,
            currency=currency,
            image_url=self._image(pagemap, attributes),
            product_url=str(item.get("link") or ""),
            source=display_source(item.get("displayLink")),
            similarity=self._policy.score(rank),
        )

    def _price(self, item: Mapping[str, Any], pagemap: Mapping[str, Any]) -> tuple[float, str]:
        for key in ("offer", "product"):
            parsed = parse_structured_price(_first(pagemap, key))
            # a zero price means the shop did not publish one
            if parsed and parsed[0] > 0:
                return round(parsed[0], 2), parsed[1]

        text = " ".join(str(item.get(key) or "") for key in ("title", "snippet"))
        parsed = parse_text_price(text)
        if parsed and parsed[0] > 0:
            return round(parsed[0], 2), parsed[1]

        return round(self._rng.randint(0, 49) + 19.99, 2), DEFAULT_CURRENCY

    @staticmethod
    def _brand_and_name(
        title: str,
        pagemap: Mapping[str, Any],
        attributes: ClothingAttributes,
    ) -> tuple[str, str]:
        structured_brand = str(_first(pagemap, "product").get("brand") or "").strip()
        if structured_brand:
            return structured_brand, title or synthetic_name(attributes)
        if not title:
            return UNKNOWN_BRAND, synthetic_name(attributes)
        return split_brand(title)

    @staticmethod
    def _image(pagemap: Mapping[str, Any], attributes: ClothingAttributes) -> str:
        for key, field_name in (("cse_image", "src"), ("cse_thumbnail", "src"), ("product", "image")):
            url = _first(pagemap, key).get(field_name)
            if url:
                return str(url)
        return placeholder_image_url(attributes)
