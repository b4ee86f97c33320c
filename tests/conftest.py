"""Shared fixtures for pattern pipeline tests."""

import pytest
from PIL import Image

from models import Palette, PatternConfig


@pytest.fixture
def rgb_palette():
    """Three-entry pure red/green/blue palette."""
    return Palette(
        colors=((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)),
        names=("R", "G", "B"),
    )


@pytest.fixture
def solid_image():
    """Factory for single-color RGBA images."""

    def make(width, height, color=(255, 0, 0, 255)):
        return Image.new("RGBA", (width, height), color)

    return make


@pytest.fixture
def small_config():
    """Config for fast renders with labels off."""
    return PatternConfig(grid_size=4, max_colors=2, cell_size=20, show_names=False)


@pytest.fixture
def palette_file(tmp_path):
    """Write an RGB palette JSON file and return its path."""
    path = tmp_path / "rgb.json"
    path.write_text(
        '{"rgb": [[1, 0, 0], [0, 1, 0], [0, 0, 1]], "name": ["R", "G", "B"]}',
        encoding="utf-8",
    )
    return path
