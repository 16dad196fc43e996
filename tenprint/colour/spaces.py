"""Colour parsing and canonical string forms.

Colours are held as ``coloraide.Color`` objects in one of four spaces. The
wire-level "mode" names are the short ones used by the browser front end:

- ``rgb``: ``srgb`` (common input/output)
- ``p3``: ``display-p3`` (wide gamut inputs and gamut checks)
- ``oklch``: ``oklch`` (perceptual working space)
- ``hsl``: ``hsl``
"""

from typing import Annotated, Any, Literal, Union

from coloraide import Color
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

MODE_TO_SPACE = {
    "rgb": "srgb",
    "p3": "display-p3",
    "oklch": "oklch",
    "hsl": "hsl",
}

SUPPORTED_SPACES = frozenset(MODE_TO_SPACE.values())

# Parsed colours in any other space are moved here.
FALLBACK_SPACE = "oklch"

INVALID_COLOUR = "Invalid colour"


class _RGBColour(BaseModel):
    mode: Literal["rgb"]
    r: float
    g: float
    b: float
    alpha: float | None = Field(default=None, ge=0, le=1)

    def channels(self) -> list[float]:
        return [self.r, self.g, self.b]


class _P3Colour(BaseModel):
    mode: Literal["p3"]
    r: float
    g: float
    b: float
    alpha: float | None = Field(default=None, ge=0, le=1)

    def channels(self) -> list[float]:
        return [self.r, self.g, self.b]


class _OklchColour(BaseModel):
    mode: Literal["oklch"]
    l: float  # noqa: E741
    c: float
    h: float
    alpha: float | None = Field(default=None, ge=0, le=1)

    def channels(self) -> list[float]:
        return [self.l, self.c, self.h]


class _HSLColour(BaseModel):
    mode: Literal["hsl"]
    h: float
    s: float
    l: float  # noqa: E741
    alpha: float | None = Field(default=None, ge=0, le=1)

    def channels(self) -> list[float]:
        return [self.h, self.s, self.l]


_mode_object_adapter: TypeAdapter[Any] = TypeAdapter(
    Annotated[
        Union[_RGBColour, _P3Colour, _OklchColour, _HSLColour],
        Field(discriminator="mode"),
    ]
)


def rgb(r: float, g: float, b: float, alpha: float = 1.0) -> Color:
    """Build an sRGB colour from channels in [0, 1]."""
    return Color("srgb", [r, g, b], alpha)


def oklch(lightness: float, chroma: float, hue: float, alpha: float = 1.0) -> Color:
    """Build an OKLCH colour."""
    return Color("oklch", [lightness, chroma, hue], alpha)


def parse_colour(value: str) -> Color:
    """Parse a CSS colour expression.

    Hex, named colours, ``rgb()``/``rgba()``, ``hsl()``/``hsla()``,
    ``oklch()`` and ``color()`` are accepted. Results outside the supported
    spaces are converted to OKLCH.

    Raises:
        ValueError: If the string is not a valid CSS colour.
    """
    try:
        colour = Color(value.strip())
    except ValueError as e:
        raise ValueError(INVALID_COLOUR) from e

    if colour.space() not in SUPPORTED_SPACES:
        colour = colour.convert(FALLBACK_SPACE)
    return colour


def colour_from_mode_object(value: dict[str, Any]) -> Color:
    """Build a colour from a mode-tagged mapping such as ``{"mode": "rgb", ...}``.

    Raises:
        ValueError: If the mapping does not match one of the supported modes.
    """
    try:
        parsed = _mode_object_adapter.validate_python(value)
    except ValidationError as e:
        raise ValueError(INVALID_COLOUR) from e

    alpha = 1.0 if parsed.alpha is None else parsed.alpha
    return Color(MODE_TO_SPACE[parsed.mode], parsed.channels(), alpha)


def coerce_colour(value: Any) -> Color:
    """Resolve untrusted input into a supported colour.

    Colour objects in a supported space pass through unchanged, strings are
    parsed as CSS and mode-tagged mappings are validated channel by channel.

    Raises:
        ValueError: For anything else.
    """
    if isinstance(value, Color):
        if value.space() not in SUPPORTED_SPACES:
            raise ValueError(INVALID_COLOUR)
        return value
    if isinstance(value, str):
        return parse_colour(value)
    if isinstance(value, dict):
        return colour_from_mode_object(value)
    raise ValueError(INVALID_COLOUR)


def colour_to_string(colour: Color) -> str:
    """Canonical string form of a colour.

    sRGB becomes uppercase hex (``#RRGGBB``, or ``#RRGGBBAA`` when
    translucent); every other space uses its CSS function syntax.
    """
    if colour.space() == "srgb":
        return colour.to_string(hex=True).upper()
    return colour.to_string()


def to_oklch(colour: Color) -> Color:
    """Convert any colour to OKLCH."""
    return colour.convert("oklch")
