"""Tests for palette colour naming."""

from __future__ import annotations

import pytest

from stylefinder.catalog.colors import (
    PALETTE,
    PALETTE_NAMES,
    InvalidColorFormat,
    color_name,
    hex_to_rgb,
    rgb_to_hex,
)


@pytest.mark.parametrize(("name", "hex_code"), PALETTE)
def test_palette_entries_are_fixed_points(name: str, hex_code: str) -> None:
    assert color_name(hex_code) == name
    assert color_name(hex_to_rgb(hex_code)) == name


def test_near_red_is_rouge() -> None:
    assert color_name((220, 20, 30)) == "rouge"


def test_dark_grey_is_noir() -> None:
    assert color_name("#1a1a1a") == "noir"


def test_output_is_always_a_palette_name() -> None:
    samples = [(0, 0, 0), (12, 200, 90), (255, 255, 254), (90, 60, 200), (300, -5, 128.6)]
    for sample in samples:
        assert color_name(sample) in PALETTE_NAMES


def test_equidistant_colour_prefers_first_declared_entry() -> None:
    # (48, 96, 48) is exactly as far from gris as from noir; gris is declared first.
    assert color_name((48, 96, 48)) == "gris"


def test_hex_without_hash_is_accepted() -> None:
    assert hex_to_rgb("00ff00") == (0, 255, 0)


@pytest.mark.parametrize("value", ["#fff", "#12345", "#1234567", "", "#GGGGGG"])
def test_malformed_hex_raises(value: str) -> None:
    with pytest.raises(InvalidColorFormat):
        color_name(value)


def test_rgb_to_hex_clamps_and_rounds() -> None:
    assert rgb_to_hex(255.4, -3, 16) == "#ff0010"
