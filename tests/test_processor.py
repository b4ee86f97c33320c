import numpy as np
import pytest
from PIL import Image

from image_processing import PatternProcessor
from models import InvalidConfigError, Palette, PatternConfig, PipelineState


def test_uniform_image_collapses_to_one_color(solid_image, rgb_palette, small_config):
    result = PatternProcessor(small_config).process(solid_image(100, 60), rgb_palette)

    assert result.grid_size == 4
    assert result.palette.names == ("R",)
    assert result.kept_indices == (0,)
    assert result.counts.tolist() == [16]
    assert result.indices.tolist() == [0] * 16
    assert result.image.size == (result.layout.width, result.layout.height)


def test_reduced_palette_respects_max_colors(rgb_palette):
    image = solid_image_stripes()
    config = PatternConfig(grid_size=3, max_colors=2, cell_size=10, show_names=False)

    result = PatternProcessor(config).process(image, rgb_palette)

    assert len(result.palette) <= 2
    assert result.indices.min() >= 0
    assert result.indices.max() < len(result.palette)
    assert int(result.counts.sum()) == 9
    assert len(result.counts) == len(result.palette)


def solid_image_stripes():
    """30x30 image with red, green and blue horizontal bands (10px each)."""
    image = Image.new("RGBA", (30, 30), (255, 0, 0, 255))
    image.paste((0, 255, 0, 255), (0, 10, 30, 20))
    image.paste((0, 0, 255, 255), (0, 20, 30, 30))
    return image


def test_all_used_colors_kept_when_under_limit(rgb_palette):
    config = PatternConfig(grid_size=3, max_colors=20, cell_size=10, show_names=False)

    result = PatternProcessor(config).process(solid_image_stripes(), rgb_palette)

    assert result.palette.names == ("R", "G", "B")
    assert result.indices.tolist() == [0, 0, 0, 1, 1, 1, 2, 2, 2]
    assert result.counts.tolist() == [3, 3, 3]


def test_single_entry_palette(solid_image):
    palette = Palette(colors=((0.5, 0.5, 0.5),), names=("G",))
    config = PatternConfig(grid_size=5, cell_size=10)

    result = PatternProcessor(config).process(solid_image(50, 50), palette)

    assert result.indices.tolist() == [0] * 25
    assert result.counts.tolist() == [25]


def test_stages_are_reported_in_order(solid_image, rgb_palette, small_config):
    seen = []
    processor = PatternProcessor(small_config, on_stage=seen.append)

    processor.process(solid_image(40, 40), rgb_palette)

    assert seen == [
        PipelineState.SAMPLING,
        PipelineState.MATCHING_FIRST,
        PipelineState.REDUCING,
        PipelineState.MATCHING_SECOND,
        PipelineState.RENDERING,
    ]


def test_image_smaller_than_grid(solid_image, rgb_palette):
    with pytest.raises(InvalidConfigError):
        PatternProcessor(PatternConfig(grid_size=10)).process(solid_image(8, 20), rgb_palette)


@pytest.mark.parametrize(
    "overrides",
    [{"grid_size": 0}, {"max_colors": 0}, {"cell_size": -1}, {"font_size": 0}],
)
def test_invalid_config_rejected(solid_image, rgb_palette, overrides):
    with pytest.raises(InvalidConfigError):
        PatternProcessor(PatternConfig(**overrides)).process(solid_image(60, 60), rgb_palette)


def test_identical_inputs_give_identical_output(rgb_palette):
    rng = np.random.default_rng(3)
    pixels = rng.integers(0, 256, size=(37, 53, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    image = Image.fromarray(pixels)
    config = PatternConfig(grid_size=6, max_colors=2)

    first = PatternProcessor(config).process(image, rgb_palette)
    second = PatternProcessor(config).process(image, rgb_palette)

    assert first.to_png_bytes() == second.to_png_bytes()
    assert first.indices.tolist() == second.indices.tolist()
