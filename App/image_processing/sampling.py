"""Square cropping and block-average downsampling.

AIDEV-NOTE: This module turns an RGBA input image into the N x N grid of
averaged colors that the palette matchers work on. Colors leave this module
as floats in [0, 1].
"""

import math

import numpy as np
from PIL import Image

from models import InvalidConfigError

# Pixels below this alpha (0-1) are sampled as pure white
ALPHA_THRESHOLD = 0.5


def center_crop_square(image: Image.Image) -> Image.Image:
    """Crop the largest centered square out of an image.

    Args:
        image: Input PIL image (any size)

    Returns:
        Square image with side min(width, height)
    """
    width, height = image.size
    side = min(width, height)
    left = (width - side) // 2
    top = (height - side) // 2
    return image.crop((left, top, left + side, top + side))


def trim_to_divisible(square: Image.Image, grid_size: int) -> Image.Image:
    """Trim a square image so its side is divisible by grid_size.

    AIDEV-NOTE: Keeps the top-left region. The crop is intentionally not
    re-centered, so at most grid_size - 1 pixels are lost from the right
    and bottom edges.
    """
    side = square.size[0]
    trimmed = side - (side % grid_size)
    if trimmed == side:
        return square
    return square.crop((0, 0, trimmed, trimmed))


def block_bounds(side: int, grid_size: int) -> "list[int]":
    """Block edge offsets along one axis, N + 1 values from 0 to side."""
    block = side / grid_size
    return [math.floor(i * block) for i in range(grid_size + 1)]


def block_average(crop: Image.Image, grid_size: int) -> np.ndarray:
    """Average each of the N x N blocks of a square crop.

    Args:
        crop: Square RGBA image whose side is divisible by grid_size
        grid_size: Number of blocks per side (N)

    Returns:
        Float array of shape (N * N, 3), row-major, channels in [0, 1]

    AIDEV-NOTE: Transparent pixels (alpha < 0.5) count as white rather than
    being left out of the average.
    """
    if crop.mode != "RGBA":
        crop = crop.convert("RGBA")
    pixels = np.asarray(crop, dtype=np.float64) / 255.0
    rgb = pixels[..., :3].copy()
    rgb[pixels[..., 3] < ALPHA_THRESHOLD] = 1.0

    bounds = block_bounds(crop.size[0], grid_size)
    starts = bounds[:-1]
    sizes = np.diff(bounds)

    # Sum rows of each block band, then columns of each block
    sums = np.add.reduceat(np.add.reduceat(rgb, starts, axis=0), starts, axis=1)
    counts = np.outer(sizes, sizes)[..., None]
    return (sums / counts).reshape(grid_size * grid_size, 3)


def sample_image(image: Image.Image, grid_size: int) -> np.ndarray:
    """Crop, trim and block-average an image into an N x N sample grid.

    Raises:
        InvalidConfigError: If the image is smaller than the grid
    """
    if grid_size < 1:
        raise InvalidConfigError(f"Grid size must be at least 1, got {grid_size}")

    square = center_crop_square(image)
    if square.size[0] < grid_size:
        raise InvalidConfigError(
            f"Image is {image.size[0]}x{image.size[1]} pixels, too small "
            f"for a {grid_size}x{grid_size} grid"
        )

    crop = trim_to_divisible(square, grid_size)
    return block_average(crop, grid_size)
