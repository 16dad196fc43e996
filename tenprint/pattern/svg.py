"""SVG document assembly."""

from urllib.parse import quote

import svgwrite

from tenprint.colour.spaces import colour_to_string
from tenprint.pattern.config import PatternConfig
from tenprint.pattern.layout import PatternLayout, layout_pattern

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def serialise_svg(layout: PatternLayout, width: int, height: int) -> str:
    """Serialise a pattern layout as an SVG document.

    Stroke width and line cap live on a single group; each segment becomes a
    ``<line>`` in layout order.

    Args:
        layout: Output of layout_pattern.
        width: Canvas width.
        height: Canvas height.

    Returns:
        SVG document text.
    """
    # Validation off: stroke values may use CSS colour functions such as
    # oklch() that svgwrite's SVG 1.1 checker does not know.
    drawing = svgwrite.Drawing(
        size=(width, height),
        viewBox=f"0 0 {width} {height}",
        debug=False,
    )
    group = drawing.g(
        stroke_width=layout.line_thickness,
        stroke_linecap=layout.line_cap,
    )

    for segment in layout.segments:
        group.add(
            drawing.line(
                start=(segment.x1, segment.y1),
                end=(segment.x2, segment.y2),
                stroke=colour_to_string(segment.stroke),
            )
        )

    drawing.add(group)
    return drawing.tostring()


def render_svg(config: PatternConfig, width: int, height: int) -> str:
    """Lay out and serialise a pattern in one step."""
    return serialise_svg(layout_pattern(config, width, height), width, height)


def svg_to_data_url(svg: str) -> str:
    """Wrap SVG text in a ``data:`` URL usable as a CSS background image."""
    return f"data:image/svg+xml;charset=utf-8,{quote(svg, safe=_URI_COMPONENT_SAFE)}"
