import numpy as np
import pytest

from image_processing.layout import compute_layout
from image_processing.rendering import (
    BLACK,
    GUTTER_COLOR,
    WHITE,
    fit_font_size,
    render_pattern,
    text_color_for,
    to_rgb255,
)
from models import LegendPosition, Palette, PatternConfig, RenderError

RED = Palette(colors=((1.0, 0.0, 0.0),), names=("R",))


def test_mid_gray_gets_black_text():
    assert text_color_for((128, 128, 128)) == BLACK


def test_dark_fill_gets_white_text():
    assert text_color_for((127, 128, 128)) == WHITE
    assert text_color_for((0, 0, 0)) == WHITE
    assert text_color_for((255, 255, 0)) == BLACK


def test_to_rgb255_rounds_half_up():
    assert to_rgb255((1.0, 0.0, 0.5)) == (255, 0, 128)
    assert to_rgb255((0.2, 0.4, 0.6)) == (51, 102, 153)


def test_fit_font_size_keeps_start_size_when_text_fits():
    assert fit_font_size("A", 1000, 1000, 14, 8) == 14


def test_fit_font_size_limited_by_height():
    assert fit_font_size("A", 1000, 11, 14, 8) == 11


def test_fit_font_size_falls_back_to_floor():
    assert fit_font_size("x" * 200, 20, 20, 14, 8) == 8


def test_canvas_matches_layout():
    config = PatternConfig(grid_size=4, cell_size=20, show_names=False)
    image = render_pattern(np.zeros(16, dtype=int), 4, RED, [16], config)
    layout = compute_layout(4, 1, config)

    assert image.mode == "RGB"
    assert image.size == (layout.width, layout.height)


@pytest.mark.parametrize("position", list(LegendPosition))
def test_cells_gutters_and_background(position):
    config = PatternConfig(
        grid_size=4, cell_size=20, show_names=False, legend_position=position
    )
    image = render_pattern(np.zeros(16, dtype=int), 4, RED, [16], config)

    # Cell interior
    assert image.getpixel((20 + 10, 20 + 10)) == (255, 0, 0)
    # Left gutter, away from the numbers
    assert image.getpixel((2, 2)) == GUTTER_COLOR
    # Bottom gutter, away from the numbers
    assert image.getpixel((20 + 80 - 2, 20 + 80 + 18)) == GUTTER_COLOR
    # Top edge right of the grid is background
    assert image.getpixel((image.width - 1, 0)) == WHITE


def test_heavy_lines_are_wider_than_regular_lines():
    config = PatternConfig(grid_size=6, cell_size=30, show_names=False)
    image = render_pattern(np.zeros(36, dtype=int), 6, RED, [36], config)
    y = 30 + 10

    def dark_run(center):
        return sum(image.getpixel((x, y)) == BLACK for x in range(center - 2, center + 3))

    thin = dark_run(30 + 1 * 30)
    heavy = dark_run(30 + 5 * 30)
    assert thin >= 1
    assert heavy > thin


def test_white_cells_are_not_labelled():
    palette = Palette(colors=((1.0, 1.0, 1.0),), names=("W",))
    config = PatternConfig(grid_size=2, cell_size=30, font_size=12, show_names=True)
    image = render_pattern(np.zeros(4, dtype=int), 2, palette, [4], config)

    pixels = np.asarray(image)
    interior = pixels[30 + 4 : 30 + 26, 30 + 4 : 30 + 26]
    assert (interior == 255).all()


def test_dark_cells_get_light_label():
    palette = Palette(colors=((0.0, 0.0, 0.0),), names=("K",))
    config = PatternConfig(grid_size=2, cell_size=30, font_size=12, show_names=True)
    image = render_pattern(np.zeros(4, dtype=int), 2, palette, [4], config)

    pixels = np.asarray(image)
    interior = pixels[30 + 4 : 30 + 26, 30 + 4 : 30 + 26]
    assert (interior > 128).any()


def test_labels_toggle_changes_output(rgb_palette):
    indices = np.array([0, 1, 2, 0])
    counts = [2, 1, 1]
    with_names = render_pattern(indices, 2, rgb_palette, counts, PatternConfig(grid_size=2))
    without = render_pattern(
        indices, 2, rgb_palette, counts, PatternConfig(grid_size=2, show_names=False)
    )
    assert with_names.size == without.size
    assert with_names.tobytes() != without.tobytes()


def test_rendering_is_deterministic(rgb_palette):
    indices = np.array([0, 1, 2, 0, 1, 2, 0, 1, 2])
    config = PatternConfig(grid_size=3, legend_position=LegendPosition.BOTTOM)

    first = render_pattern(indices, 3, rgb_palette, [3, 3, 3], config)
    second = render_pattern(indices, 3, rgb_palette, [3, 3, 3], config)

    assert first.tobytes() == second.tobytes()


def test_drawing_failure_is_wrapped():
    config = PatternConfig(grid_size=4)
    with pytest.raises(RenderError):
        render_pattern(np.zeros(3, dtype=int), 4, RED, [3], config)


def test_bottom_legend_caption_is_dark_beside_dark_swatch():
    palette = Palette(colors=((0.0, 0.0, 0.0),), names=("K",))
    config = PatternConfig(
        grid_size=2,
        cell_size=30,
        font_size=12,
        legend_position=LegendPosition.BOTTOM,
    )
    image = render_pattern(np.zeros(4, dtype=int), 2, palette, [4], config)
    layout = compute_layout(2, 1, config)

    pixels = np.asarray(image)
    # Caption starts right of the 90px swatch, baseline 21px below its top
    top = layout.legend_y
    caption = pixels[top + 5 : top + 25, 90 + 6 : layout.width]
    assert (caption.max(axis=-1) < 100).any()
