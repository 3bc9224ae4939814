"""
Conversion between ``#rrggbb`` hex colors and the ``rgba(...)`` text stored in style documents.
"""

import logging
import re

import webcolors

logger = logging.getLogger(__name__)

FALLBACK_HEX = "#000000"

_RGB_TEXT_PATTERN = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)")


class InvalidColorFormat(ValueError):
    """Raised when a hex color is not of the form ``#rrggbb``."""


def hex_to_color_text(hex_color: str) -> str:
    """
    Convert ``#rrggbb`` to ``rgba(r, g, b, 1)``.

    The result is always fully opaque. Short (``#rgb``) and alpha-bearing hex forms are
    rejected so that the conversion stays reversible.

    Raises:
        InvalidColorFormat: if the input is not a 7 character ``#rrggbb`` string.
    """
    if not isinstance(hex_color, str) or len(hex_color) != 7 or not hex_color.startswith("#"):
        raise InvalidColorFormat(f"Expected a '#rrggbb' color, got {hex_color!r}")
    try:
        rgb = webcolors.hex_to_rgb(hex_color)
    except ValueError as e:
        raise InvalidColorFormat(f"Expected a '#rrggbb' color, got {hex_color!r}") from e
    return f"rgba({rgb.red}, {rgb.green}, {rgb.blue}, 1)"


def color_text_to_hex(color_text: str) -> str:
    """
    Best-effort conversion of a document color to ``#rrggbb`` for display in a color picker.

    Hex input is returned unchanged. ``rgb(...)``/``rgba(...)`` input keeps its first three
    channels and drops alpha. Anything else yields ``#000000``; callers must not treat the
    result as a faithful representation of the original value.
    """
    if not color_text:
        return FALLBACK_HEX
    if color_text.startswith("#"):
        return color_text

    match = _RGB_TEXT_PATTERN.search(color_text)
    if not match:
        logger.debug(f"Unrecognized color text {color_text!r}, using {FALLBACK_HEX}")
        return FALLBACK_HEX

    red, green, blue = (int(channel) for channel in match.groups())
    return webcolors.rgb_to_hex((red, green, blue))


def is_simple_color(value) -> bool:
    """True for string colors the color picker can edit directly."""
    return isinstance(value, str) and (value.startswith("rgba") or value.startswith("#"))
