"""Grid geometry for the 10 PRINT pattern.

Each cell of the grid gets one diagonal: forward ("/") cells are stroked with
the first colour, backward ("\\") cells with the second. All forward lines are
emitted before all backward lines so the backward direction consistently
paints on top.
"""

import math
from dataclasses import dataclass

from coloraide import Color

from tenprint.pattern.config import PatternConfig
from tenprint.pattern.prng import seeded_random

LINE_CAP = "round"


@dataclass(frozen=True)
class LineSegment:
    """One cell's diagonal, with integer endpoints."""

    col: int
    row: int
    forward: bool
    x1: int
    y1: int
    x2: int
    y2: int
    stroke: Color


@dataclass(frozen=True)
class PatternLayout:
    """Ordered line segments plus the group-level stroke settings.

    Attributes:
        segments: Forward diagonals first, then backward diagonals, each in
            row-major order.
        line_thickness: Stroke width applied to the whole group.
        line_cap: Stroke line cap applied to the whole group.
        cell_size: Side length of one grid cell, before rounding.
        cols: Column count, including one cell of overscan.
        rows: Row count, including one cell of overscan.
    """

    segments: tuple[LineSegment, ...]
    line_thickness: int
    line_cap: str = LINE_CAP
    cell_size: float = 0.0
    cols: int = 0
    rows: int = 0

    @property
    def forward_count(self) -> int:
        return sum(1 for segment in self.segments if segment.forward)


def cell_size_for(width: int, height: int, grid_size: int) -> float:
    """Size of one cell so ``grid_size`` cells span the larger dimension.

    Canvases thinner than the grid size fall back to a cell size derived from
    the smaller dimension so the grid never degenerates.
    """
    min_dimension = min(width, height)
    max_dimension = max(width, height)
    if min_dimension < grid_size:
        return min_dimension / min(grid_size, min_dimension)
    return max_dimension / grid_size


def layout_pattern(config: PatternConfig, width: int, height: int) -> PatternLayout:
    """Compute the line segments for a pattern.

    Args:
        config: Validated pattern parameters.
        width: Canvas width in user units.
        height: Canvas height in user units.

    Returns:
        PatternLayout; empty when either dimension is not positive.
    """
    if width <= 0 or height <= 0:
        return PatternLayout(segments=(), line_thickness=config.line_thickness)

    cell_size = cell_size_for(width, height, config.grid_size)
    cols = math.ceil(width / cell_size) + 1
    rows = math.ceil(height / cell_size) + 1

    forward_lines: list[LineSegment] = []
    backward_lines: list[LineSegment] = []

    for row in range(rows):
        for col in range(cols):
            x = col * cell_size
            y = row * cell_size
            is_forward = seeded_random(col, row, config.seed) > 0.5

            # Round up so adjacent cells never leave sub-pixel gaps
            segment = LineSegment(
                col=col,
                row=row,
                forward=is_forward,
                x1=math.ceil(x),
                y1=math.ceil(y + cell_size if is_forward else y),
                x2=math.ceil(x + cell_size),
                y2=math.ceil(y if is_forward else y + cell_size),
                stroke=config.first_colour if is_forward else config.second_colour,
            )

            if is_forward:
                forward_lines.append(segment)
            else:
                backward_lines.append(segment)

    return PatternLayout(
        segments=tuple(forward_lines + backward_lines),
        line_thickness=config.line_thickness,
        cell_size=cell_size,
        cols=cols,
        rows=rows,
    )
