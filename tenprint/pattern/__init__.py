"""Pattern parameters, layout and SVG output."""

from tenprint.pattern.config import (
    ConfigResult,
    FieldIssue,
    InvalidConfig,
    PatternConfig,
    ValidConfig,
    validate_config,
)
from tenprint.pattern.layout import LineSegment, PatternLayout, layout_pattern
from tenprint.pattern.prng import seeded_random
from tenprint.pattern.svg import render_svg, serialise_svg, svg_to_data_url

__all__ = [
    "ConfigResult",
    "FieldIssue",
    "InvalidConfig",
    "PatternConfig",
    "ValidConfig",
    "validate_config",
    "LineSegment",
    "PatternLayout",
    "layout_pattern",
    "seeded_random",
    "render_svg",
    "serialise_svg",
    "svg_to_data_url",
]
