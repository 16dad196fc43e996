"""Colour parsing, canonical strings and harmonious pair generation."""

from tenprint.colour.harmony import ColourPair, generate_pair
from tenprint.colour.spaces import (
    coerce_colour,
    colour_to_string,
    oklch,
    parse_colour,
    rgb,
    to_oklch,
)

__all__ = [
    "ColourPair",
    "generate_pair",
    "coerce_colour",
    "colour_to_string",
    "oklch",
    "parse_colour",
    "rgb",
    "to_oklch",
]
