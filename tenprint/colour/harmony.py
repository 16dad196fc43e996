"""Random stroke colour pairs that read well together.

Colours are sampled in OKLCH so lightness, chroma and hue map cleanly to
perception:

- hues are either softened complements or analogous;
- a lightness gap keeps the two stroke directions distinct;
- chroma stays modest to avoid shimmering in dense line art;
- chroma is reduced until both colours fit Display P3.
"""

import math
import random
from dataclasses import dataclass

import structlog
from coloraide import Color

from tenprint.colour.spaces import oklch, to_oklch

logger = structlog.get_logger()

GAMUT = "display-p3"

# Strokes contrast with the background: darker (but not black) on light
# backgrounds, lighter (but not glaring) on dark ones.
LIGHT_BACKGROUND_BAND = (0.2, 0.7)
DARK_BACKGROUND_BAND = (0.55, 0.92)

MIN_CHROMA = 0.06
MAX_CHROMA = 0.2

COMPLEMENT_PROBABILITY = 0.6
COMPLEMENT_JITTER = (18.0, 14.0)  # min, range: 18..32 degrees
ANALOGOUS_DELTA = (20.0, 20.0)  # min, range: 20..40 degrees

LIGHTNESS_GAP_CENTRE = 0.14
LIGHTNESS_GAP_RANGE = 0.06  # +/- 0.03

CHROMA_NUDGE = (0.015, 0.02)  # min, range: 0.015..0.035

MAX_ATTEMPTS = 200

DEFAULT_BACKGROUND_LIGHTNESS = 0.97

# Binary search stops once the chroma bracket is narrower than this.
CHROMA_RESOLUTION = 1e-5


@dataclass(frozen=True)
class ColourPair:
    """Two OKLCH stroke colours, one per diagonal direction."""

    first_colour: Color
    second_colour: Color


def wrap_hue(hue: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    return ((hue % 360) + 360) % 360


def make_oklch(hue: float, chroma: float, lightness: float) -> Color:
    return oklch(lightness, chroma, wrap_hue(hue))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_chroma(colour: Color, gamut: str = GAMUT) -> Color:
    """Reduce an OKLCH colour's chroma until it fits ``gamut``.

    Lightness and hue are kept. Colours already in gamut are returned as is.

    Args:
        colour: OKLCH colour.
        gamut: Target colour space name.

    Returns:
        The largest-chroma in-gamut colour with the same lightness and hue,
        found by bisection.
    """
    if colour.in_gamut(gamut):
        return colour

    lightness, chroma, hue = colour[0], colour[1], colour[2]
    low, high = 0.0, chroma
    while high - low > CHROMA_RESOLUTION:
        mid = (low + high) / 2
        if oklch(lightness, mid, hue, colour.alpha()).in_gamut(gamut):
            low = mid
        else:
            high = mid
    return oklch(lightness, low, hue, colour.alpha())


def is_light(background: Color) -> bool:
    """Whether a background reads as light (OKLCH lightness >= 0.5)."""
    return to_oklch(background)[0] >= 0.5


def _fallback_pair(light_background: bool) -> ColourPair:
    first = clamp_chroma(make_oklch(210, 0.1, 0.65 if light_background else 0.75))
    second = clamp_chroma(make_oklch(30, 0.08, 0.79 if light_background else 0.9))
    return ColourPair(first_colour=first, second_colour=second)


def generate_pair(
    seed: str | float | None = None,
    background: Color | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> ColourPair:
    """Generate two harmonious stroke colours.

    Args:
        seed: Optional seed; the same seed always gives the same pair.
        background: Optional background colour in any supported space, used
            to pick darker strokes on light backgrounds and lighter strokes on
            dark ones. Defaults to a near-white neutral.
        max_attempts: Sampling attempts before the fixed fallback pair.

    Returns:
        A pair of OKLCH colours within Display P3.
    """
    rng = random.Random() if seed is None else random.Random(str(seed))

    if background is None:
        background = make_oklch(0, 0, DEFAULT_BACKGROUND_LIGHTNESS)
    light_background = is_light(background)
    min_l, max_l = LIGHT_BACKGROUND_BAND if light_background else DARK_BACKGROUND_BAND

    for _ in range(max_attempts):
        h1 = rng.random() * 360
        base_l = min_l + rng.random() * (max_l - min_l)
        base_c = MIN_CHROMA + rng.random() * (MAX_CHROMA - MIN_CHROMA)

        if rng.random() < COMPLEMENT_PROBABILITY:
            sign = -1 if rng.random() < 0.5 else 1
            h2 = h1 + 180 + sign * (COMPLEMENT_JITTER[0] + rng.random() * COMPLEMENT_JITTER[1])
        else:
            sign = -1 if rng.random() < 0.5 else 1
            h2 = h1 + sign * (ANALOGOUS_DELTA[0] + rng.random() * ANALOGOUS_DELTA[1])

        gap = LIGHTNESS_GAP_CENTRE + (
            rng.random() * LIGHTNESS_GAP_RANGE - LIGHTNESS_GAP_RANGE / 2
        )
        lighter_first = rng.random() < 0.5
        l1 = base_l + gap / 2 if lighter_first else base_l - gap / 2
        l2 = base_l - gap / 2 if lighter_first else base_l + gap / 2
        l1 = _clamp(l1, min_l, max_l)
        l2 = _clamp(l2, min_l, max_l)

        # The darker stroke gets a little more chroma so it doesn't fade.
        nudge = CHROMA_NUDGE[0] + rng.random() * CHROMA_NUDGE[1]
        c1 = base_c + nudge if l1 < l2 else base_c - nudge
        c2 = base_c + nudge if l2 < l1 else base_c - nudge
        c1 = _clamp(c1, MIN_CHROMA, MAX_CHROMA)
        c2 = _clamp(c2, MIN_CHROMA, MAX_CHROMA)

        first = clamp_chroma(make_oklch(h1, c1, l1))
        second = clamp_chroma(make_oklch(h2, c2, l2))

        if not first.in_gamut(GAMUT) or not second.in_gamut(GAMUT):
            continue

        return ColourPair(first_colour=first, second_colour=second)

    logger.warning("colour_pair_fallback", attempts=max_attempts, seed=seed)
    return _fallback_pair(light_background)


def same_colour(a: Color, b: Color, tolerance: float = 1e-6) -> bool:
    """Whether two colours match in OKLCH lightness, chroma and hue."""
    a, b = to_oklch(a), to_oklch(b)
    for x, y in zip(a[:3], b[:3]):
        if math.isnan(x) and math.isnan(y):
            continue
        if math.isnan(x) or math.isnan(y) or abs(x - y) >= tolerance:
            return False
    return True
