"""Raster rendering of the annotated pattern.

AIDEV-NOTE: render_pattern() allocates a fresh Pillow image, draws the grid,
labels, gutters and legend into it, and hands it back. Geometry comes from
layout.py; nothing here keeps state between calls apart from the font cache.
"""

from functools import lru_cache

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from models import LegendPosition, Palette, PatternConfig, RenderError

from .layout import (
    BOTTOM_TEXT_BASELINE,
    BOTTOM_TEXT_OFFSET,
    cell_origin,
    compute_layout,
    grid_lines,
    legend_slots,
    round_half_up,
)

BACKGROUND = (255, 255, 255)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GUTTER_COLOR = (17, 112, 189)
LINE_COLOR = BLACK
# Bottom-legend captions are drawn on the background beside the swatch
BOTTOM_CAPTION_COLOR = BLACK

# Legend text fitting
LEGEND_TEXT_PADDING = 4
LEGEND_MIN_BOX = 10
LEGEND_MIN_FONT = 8
LEGEND_MAX_FONT_FLOOR = 10

FONT_CANDIDATES = (
    "DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "Arial.ttf",
)


@lru_cache(maxsize=64)
def load_font(size: int) -> "ImageFont.FreeTypeFont | ImageFont.ImageFont":
    """Load a sans-serif font at the given pixel size."""
    for candidate in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def text_width(text: str, size: int) -> float:
    return load_font(size).getlength(text)


def to_rgb255(color: "tuple[float, float, float]") -> "tuple[int, int, int]":
    """Convert a 0-1 float color to 8-bit channels."""
    r, g, b = color
    return (
        round_half_up(r * 255),
        round_half_up(g * 255),
        round_half_up(b * 255),
    )


def text_color_for(rgb: "tuple[int, int, int]") -> "tuple[int, int, int]":
    """Pick white or black text for legibility on an 8-bit fill color.

    Mean channel value below 128 gets white text; 128 and above gets black.
    """
    r, g, b = rgb
    return WHITE if (r + g + b) / 3 < 128 else BLACK


def fit_font_size(
    text: str,
    max_width: float,
    max_height: float,
    start_size: int,
    min_size: int,
) -> int:
    """Largest font size from start_size down to min_size that fits a box.

    Text height is taken as the font size. Returns min_size when nothing fits.
    """
    for size in range(start_size, min_size - 1, -1):
        if text_width(text, size) <= max_width and size <= max_height:
            return size
    return min_size


def _fill_rect(draw: ImageDraw.ImageDraw, x: int, y: int, w: int, h: int, color):
    if w <= 0 or h <= 0:
        return
    draw.rectangle([x, y, x + w - 1, y + h - 1], fill=color)


def _stroke_rect(draw: ImageDraw.ImageDraw, x: int, y: int, w: int, h: int, color):
    if w <= 0 or h <= 0:
        return
    draw.rectangle([x, y, x + w - 1, y + h - 1], outline=color, width=1)


def render_pattern(
    indices: np.ndarray,
    grid_size: int,
    palette: Palette,
    counts: "np.ndarray | list[int]",
    config: PatternConfig,
) -> Image.Image:
    """Render the final pattern raster.

    Args:
        indices: Reduced-palette index per cell, row-major (N * N)
        grid_size: Cells per side (N)
        palette: Reduced palette
        counts: Second-pass count per reduced palette entry
        config: Pattern configuration

    Returns:
        RGB PIL image

    Raises:
        RenderError: If allocation or drawing fails
    """
    try:
        return _render(indices, grid_size, palette, counts, config)
    except Exception as e:
        raise RenderError(f"Failed to render pattern: {e}") from e


def _render(indices, grid_size, palette, counts, config) -> Image.Image:
    layout = compute_layout(grid_size, len(palette), config)
    cell = layout.cell_size
    margin = layout.margin
    grid_px = layout.grid_px

    image = Image.new("RGB", (layout.width, layout.height), BACKGROUND)
    draw = ImageDraw.Draw(image)

    # Numbered gutters: bottom strip under the grid and left strip beside it
    _fill_rect(draw, 0, margin + grid_px, margin + grid_px, margin, GUTTER_COLOR)
    _fill_rect(draw, 0, 0, margin, margin + grid_px, GUTTER_COLOR)

    fills = [to_rgb255(color) for color in palette.colors]
    label_font = load_font(config.font_size)

    # Cells
    for row in range(grid_size):
        for col in range(grid_size):
            index = int(indices[row * grid_size + col])
            fill = fills[index]
            x0, y0 = cell_origin(layout, row, col)
            _fill_rect(draw, x0, y0, cell, cell, fill)

            if config.show_names and fill != WHITE:
                draw.text(
                    (x0 + cell / 2, y0 + cell / 2),
                    palette.names[index],
                    fill=text_color_for(fill),
                    font=label_font,
                    anchor="mm",
                )

    for line in grid_lines(layout, grid_size):
        draw.line([line.start, line.end], fill=LINE_COLOR, width=line.width)

    # Axis numbers
    axis_font = load_font(config.font_size + 2)
    for i in range(1, grid_size + 1):
        label = str(i)
        center = margin + (i - 1) * cell + cell / 2
        draw.text((margin / 2, center), label, fill=WHITE, font=axis_font, anchor="mm")
        draw.text(
            (center, margin + grid_px + margin / 2),
            label,
            fill=WHITE,
            font=axis_font,
            anchor="mm",
        )

    _draw_legend(draw, layout, palette, fills, counts, config)
    return image


def _draw_legend(draw, layout, palette, fills, counts, config):
    """Draw one swatch, border and optional caption per palette entry."""
    for slot in legend_slots(layout, len(palette)):
        fill = fills[slot.index]
        _fill_rect(draw, slot.x, slot.y, slot.width, slot.height, fill)
        _stroke_rect(draw, slot.x, slot.y, slot.width, slot.height, BLACK)

        if not config.show_names:
            continue

        text = f"{palette.names[slot.index]} ({int(counts[slot.index])})"
        if layout.legend_position == LegendPosition.RIGHT:
            max_width = max(LEGEND_MIN_BOX, slot.width - 2 * LEGEND_TEXT_PADDING)
            max_height = max(LEGEND_MIN_BOX, slot.height - 2 * LEGEND_TEXT_PADDING)
            size = fit_font_size(
                text,
                max_width,
                max_height,
                max(LEGEND_MAX_FONT_FLOOR, config.font_size + 2),
                LEGEND_MIN_FONT,
            )
            draw.text(
                (slot.x + slot.width / 2, slot.y + slot.height / 2),
                text,
                fill=text_color_for(fill),
                font=load_font(size),
                anchor="mm",
            )
        else:
            draw.text(
                (
                    slot.x + slot.width + BOTTOM_TEXT_OFFSET,
                    slot.y + round_half_up(BOTTOM_TEXT_BASELINE * layout.cell_size),
                ),
                text,
                fill=BOTTOM_CAPTION_COLOR,
                font=load_font(config.font_size + 2),
                anchor="ls",
            )
