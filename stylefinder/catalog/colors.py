"""Colour naming against a fixed palette."""

from __future__ import annotations

import math
import string
from typing import Sequence, Union

from stylefinder.models import DEFAULT_COLOR_NAME

PALETTE: tuple[tuple[str, str], ...] = (
    ("rouge", "#FF0000"),
    ("vert", "#00FF00"),
    ("bleu", "#0000FF"),
    ("jaune", "#FFFF00"),
    ("orange", "#FFA500"),
    ("violet", "#800080"),
    ("rose", "#FFC0CB"),
    ("marron", "#A52A2A"),
    ("gris", "#808080"),
    ("noir", "#000000"),
    ("blanc", "#FFFFFF"),
)

PALETTE_NAMES = frozenset(name for name, _ in PALETTE)

ColorInput = Union[str, Sequence[float]]


class InvalidColorFormat(ValueError):
    """Raised when a hex colour string is not of the ``#RRGGBB`` form."""


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """Parse ``#RRGGBB`` (leading ``#`` optional) into an RGB triple."""

    digits = value.strip().removeprefix("#")
    if len(digits) != 6 or any(char not in string.hexdigits for char in digits):
        raise InvalidColorFormat(f"Expected a #RRGGBB colour, got {value!r}.")
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def _channel(value: float) -> int:
    return max(0, min(255, int(round(value))))


def rgb_to_hex(red: float, green: float, blue: float) -> str:
    """Return a lowercase ``#rrggbb`` string, clamping each channel to 0-255."""

    return "#{:02x}{:02x}{:02x}".format(_channel(red), _channel(green), _channel(blue))


_PALETTE_RGB = tuple((name, hex_to_rgb(hex_code)) for name, hex_code in PALETTE)


def color_name(color: ColorInput) -> str:
    """
    Return the palette name closest to ``color`` in RGB space.

    Accepts a hex string or an RGB triple. Ties go to the entry declared first
    in ``PALETTE``. Hex strings of the wrong shape raise ``InvalidColorFormat``.
    """

    if isinstance(color, str):
        red, green, blue = hex_to_rgb(color)
    else:
        red, green, blue = (_channel(channel) for channel in color)

    closest = DEFAULT_COLOR_NAME
    closest_distance = math.inf
    for name, (pr, pg, pb) in _PALETTE_RGB:
        distance = math.sqrt((red - pr) ** 2 + (green - pg) ** 2 + (blue - pb) ** 2)
        if distance < closest_distance:
            closest_distance = distance
            closest = name
    return closest
