"""Canvas geometry for the rendered pattern.

AIDEV-NOTE: Everything here is pure arithmetic on grid size, palette size
and PatternConfig. rendering.py only draws what these functions describe,
so layout can be tested without touching pixels.
"""

import math

from models import (
    GridLine,
    LegendPosition,
    LegendSlot,
    PatternConfig,
    RenderLayout,
)

# Gap between grid and right-hand legend, and after it (x cell_size)
RIGHT_LEGEND_PADDING = 0.6
# Grid cells spanned by one right-legend row when sizing the legend
RIGHT_LEGEND_ROW_SPAN = 1.5

# AIDEV-NOTE: Bottom-layout constants are heuristic; tweak freely.
BOTTOM_LEGEND_CELL_WIDTH = 3.5  # column pitch (x cell_size)
BOTTOM_LEGEND_CELL_HEIGHT = 1.5  # row pitch (x cell_size)
BOTTOM_LEGEND_TOP = 1.5  # grid bottom to first legend row (x cell_size)
BOTTOM_LEGEND_EXTRA_HEIGHT = 2.5  # canvas height below grid before rows
BOTTOM_SWATCH_WIDTH = 3.0  # swatch size (x cell_size)
BOTTOM_SWATCH_HEIGHT = 1.0
BOTTOM_TEXT_OFFSET = 6  # px between swatch and its label
BOTTOM_TEXT_BASELINE = 0.7  # label baseline below swatch top (x cell_size)

# Grid lines
GRID_LINE_WIDTH = 1
HEAVY_LINE_WIDTH = 3
HEAVY_LINE_EVERY = 5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def right_legend_rows(grid_size: int) -> int:
    return max(1, math.floor((grid_size + 1.5) / RIGHT_LEGEND_ROW_SPAN))


def bottom_legend_cols(grid_size: int) -> int:
    return max(1, math.floor((grid_size + 1.5) / BOTTOM_LEGEND_CELL_WIDTH))


def compute_layout(grid_size: int, palette_size: int, config: PatternConfig) -> RenderLayout:
    """Compute canvas geometry for a pattern.

    Args:
        grid_size: Cells per side (N)
        palette_size: Number of legend entries
        config: Pattern configuration (cell size, ratios, legend position)

    Returns:
        RenderLayout with canvas size and legend table shape
    """
    cell = config.cell_size
    margin = cell
    grid_px = grid_size * cell

    if config.legend_position == LegendPosition.BOTTOM:
        swatch_width = round_half_up(BOTTOM_SWATCH_WIDTH * cell)
        swatch_height = round_half_up(BOTTOM_SWATCH_HEIGHT * cell)
        pitch_x = round_half_up(BOTTOM_LEGEND_CELL_WIDTH * cell)
        pitch_y = round_half_up(BOTTOM_LEGEND_CELL_HEIGHT * cell)

        cols = bottom_legend_cols(grid_size)
        rows = math.ceil(palette_size / cols)
        width = margin + grid_px + cell
        height = (
            margin
            + grid_px
            + round_half_up(BOTTOM_LEGEND_EXTRA_HEIGHT * cell)
            + rows * pitch_y
        )
        return RenderLayout(
            legend_position=LegendPosition.BOTTOM,
            cell_size=cell,
            margin=margin,
            grid_px=grid_px,
            swatch_width=swatch_width,
            swatch_height=swatch_height,
            gap_x=pitch_x - swatch_width,
            gap_y=pitch_y - swatch_height,
            legend_rows=rows,
            legend_cols=cols,
            legend_x=0,
            legend_y=margin + grid_px + round_half_up(BOTTOM_LEGEND_TOP * cell),
            width=width,
            height=height,
        )

    swatch_width = round_half_up(config.swatch_width_ratio * cell)
    swatch_height = round_half_up(config.swatch_height_ratio * cell)
    gap_x = round_half_up(config.gap_x_ratio * cell)
    gap_y = round_half_up(config.gap_y_ratio * cell)
    padding = round_half_up(RIGHT_LEGEND_PADDING * cell)

    rows = right_legend_rows(grid_size)
    cols = math.ceil(palette_size / rows)
    width = margin + grid_px + padding + cols * (swatch_width + gap_x) + padding
    height = margin + grid_px + margin

    return RenderLayout(
        legend_position=LegendPosition.RIGHT,
        cell_size=cell,
        margin=margin,
        grid_px=grid_px,
        swatch_width=swatch_width,
        swatch_height=swatch_height,
        gap_x=gap_x,
        gap_y=gap_y,
        legend_rows=rows,
        legend_cols=cols,
        legend_x=margin + grid_px + padding,
        legend_y=margin,
        width=width,
        height=height,
    )


def legend_slots(layout: RenderLayout, palette_size: int) -> "list[LegendSlot]":
    """Swatch rectangles for every legend entry.

    AIDEV-NOTE: The right legend fills column by column (top to bottom,
    then the next column); the bottom legend fills row by row.
    """
    pitch_x = layout.swatch_width + layout.gap_x
    pitch_y = layout.swatch_height + layout.gap_y

    slots = []
    for index in range(palette_size):
        if layout.legend_position == LegendPosition.RIGHT:
            row = index % layout.legend_rows
            col = index // layout.legend_rows
        else:
            row = index // layout.legend_cols
            col = index % layout.legend_cols
        slots.append(
            LegendSlot(
                index=index,
                x=layout.legend_x + col * pitch_x,
                y=layout.legend_y + row * pitch_y,
                width=layout.swatch_width,
                height=layout.swatch_height,
            )
        )
    return slots


def grid_lines(layout: RenderLayout, grid_size: int) -> "list[GridLine]":
    """All N + 1 vertical and N + 1 horizontal grid lines."""
    margin = layout.margin
    far = margin + layout.grid_px
    lines = []
    for k in range(grid_size + 1):
        offset = margin + k * layout.cell_size
        width = HEAVY_LINE_WIDTH if k % HEAVY_LINE_EVERY == 0 else GRID_LINE_WIDTH
        lines.append(GridLine(True, k, (offset, margin), (offset, far), width))
        lines.append(GridLine(False, k, (margin, offset), (far, offset), width))
    return lines


def cell_origin(layout: RenderLayout, row: int, col: int) -> "tuple[int, int]":
    """Top-left canvas pixel of a grid cell."""
    return (
        layout.margin + col * layout.cell_size,
        layout.margin + row * layout.cell_size,
    )
