import numpy as np
import pytest
from PIL import Image

from image_processing.sampling import (
    block_average,
    block_bounds,
    center_crop_square,
    sample_image,
    trim_to_divisible,
)
from models import InvalidConfigError


def test_center_crop_takes_middle_of_wide_image():
    # 20px red columns on both sides of a 60px blue middle
    image = Image.new("RGBA", (100, 60), (255, 0, 0, 255))
    image.paste((0, 0, 255, 255), (20, 0, 80, 60))

    square = center_crop_square(image)

    assert square.size == (60, 60)
    assert set(square.getdata()) == {(0, 0, 255, 255)}


def test_center_crop_tall_image_offset_is_floored():
    image = Image.new("RGBA", (10, 15), (0, 0, 0, 255))
    # Row 2 is the first row kept: (15 - 10) // 2 == 2
    image.paste((255, 255, 255, 255), (0, 2, 10, 3))

    square = center_crop_square(image)

    assert square.size == (10, 10)
    assert square.getpixel((0, 0)) == (255, 255, 255, 255)
    assert square.getpixel((0, 1)) == (0, 0, 0, 255)


def test_trim_returns_same_image_when_divisible():
    square = Image.new("RGBA", (60, 60))
    assert trim_to_divisible(square, 4) is square


def test_trim_keeps_top_left_region():
    square = Image.new("RGBA", (63, 63), (0, 0, 0, 255))
    square.paste((255, 255, 255, 255), (60, 0, 63, 63))

    trimmed = trim_to_divisible(square, 4)

    assert trimmed.size == (60, 60)
    assert set(trimmed.getdata()) == {(0, 0, 0, 255)}


@pytest.mark.parametrize("side, n", [(61, 4), (100, 7), (13, 13), (50, 1), (99, 10)])
def test_trimmed_side_is_divisible_and_not_larger(side, n):
    trimmed = trim_to_divisible(Image.new("RGBA", (side, side)), n)
    assert trimmed.size[0] % n == 0
    assert trimmed.size[0] <= side


@pytest.mark.parametrize(
    "size, n",
    [((100, 60), 4), ((37, 80), 5), ((7, 7), 7), ((200, 199), 13), ((5, 9), 1)],
)
def test_sampling_yields_n_squared_cells(size, n):
    grid = sample_image(Image.new("RGBA", size, (10, 20, 30, 255)), n)
    assert grid.shape == (n * n, 3)


def test_sampling_wide_example_gives_sixteen_cells():
    grid = sample_image(Image.new("RGBA", (100, 60), (255, 0, 0, 255)), 4)
    assert len(grid) == 16
    np.testing.assert_allclose(grid, np.tile([1.0, 0.0, 0.0], (16, 1)))


def test_block_average_is_row_major():
    image = Image.new("RGBA", (4, 4), (0, 0, 0, 255))
    image.paste((255, 0, 0, 255), (2, 0, 4, 2))  # top-right
    image.paste((0, 0, 255, 255), (0, 2, 2, 4))  # bottom-left

    grid = block_average(image, 2)

    np.testing.assert_allclose(grid[0], [0, 0, 0])
    np.testing.assert_allclose(grid[1], [1, 0, 0])
    np.testing.assert_allclose(grid[2], [0, 0, 1])
    np.testing.assert_allclose(grid[3], [0, 0, 0])


def test_block_average_mixes_block_pixels():
    image = Image.new("RGBA", (2, 2), (0, 0, 0, 255))
    image.putpixel((0, 0), (255, 255, 255, 255))

    grid = block_average(image, 1)

    np.testing.assert_allclose(grid[0], [0.25, 0.25, 0.25])


def test_fully_transparent_block_is_white():
    image = Image.new("RGBA", (8, 8), (12, 34, 56, 0))
    grid = block_average(image, 2)
    np.testing.assert_allclose(grid, np.ones((4, 3)))


def test_transparent_pixels_count_as_white_in_average():
    image = Image.new("RGBA", (2, 2), (0, 0, 0, 255))
    image.putpixel((0, 1), (0, 0, 0, 0))
    image.putpixel((1, 1), (0, 0, 0, 0))

    grid = block_average(image, 1)

    np.testing.assert_allclose(grid[0], [0.5, 0.5, 0.5])


def test_alpha_threshold_boundary():
    below = Image.new("RGBA", (1, 1), (0, 0, 0, 127))
    at_half = Image.new("RGBA", (1, 1), (0, 0, 0, 128))

    np.testing.assert_allclose(block_average(below, 1)[0], [1, 1, 1])
    np.testing.assert_allclose(block_average(at_half, 1)[0], [0, 0, 0])


def test_block_bounds_span_whole_side():
    assert block_bounds(60, 4) == [0, 15, 30, 45, 60]


def test_image_smaller_than_grid_is_rejected():
    with pytest.raises(InvalidConfigError):
        sample_image(Image.new("RGBA", (3, 10)), 4)
