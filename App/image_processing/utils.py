"""Helper functions for input images.

AIDEV-NOTE: Image loading, the built-in demo picture and preview scaling.
Kept separate from the pipeline stages, which only ever see PIL images.
"""

from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, UnidentifiedImageError

from models import ImageLoadError

from .rendering import load_font

# Demo image: diagonal gradient with a faint caption
DEMO_SIZE = (480, 320)
DEMO_STOPS = (
    (0.0, (255, 106, 0)),  # #ff6a00
    (0.5, (0, 212, 255)),  # #00d4ff
    (1.0, (127, 255, 0)),  # #7fff00
)
DEMO_CAPTION = "DEMO"
DEMO_CAPTION_ALPHA = 38  # ~15% black

# Longest side of the on-screen input preview
PREVIEW_MAX_SIDE = 520


def load_image(file_path: "str | Path") -> Image.Image:
    """Load and decode an image file.

    Args:
        file_path: Path to image file (PNG, JPG, etc.)

    Returns:
        PIL Image in RGBA mode

    Raises:
        ImageLoadError: If file cannot be loaded or is invalid
    """
    try:
        with Image.open(file_path) as image:
            # AIDEV-NOTE: Always convert to RGBA for consistent sampling
            return image.convert("RGBA")
    except (OSError, UnidentifiedImageError, ValueError) as e:
        raise ImageLoadError(f"Failed to load image: {e}") from e


def make_demo_image() -> Image.Image:
    """Build the deterministic demo picture (RGBA).

    The gradient runs along the top-left to bottom-right diagonal.
    """
    width, height = DEMO_SIZE
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    # Project onto the diagonal, 0 at top-left, 1 at bottom-right
    t = (xs * width + ys * height) / (width * width + height * height)

    positions = np.array([stop for stop, _ in DEMO_STOPS])
    colors = np.array([color for _, color in DEMO_STOPS], dtype=np.float64)
    channels = [np.interp(t, positions, colors[:, c]) for c in range(3)]
    rgb = np.clip(np.rint(np.stack(channels, axis=-1)), 0, 255).astype(np.uint8)

    image = Image.fromarray(rgb).convert("RGBA")

    overlay = Image.new("RGBA", image.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    draw.text(
        (30, 80),
        DEMO_CAPTION,
        fill=(0, 0, 0, DEMO_CAPTION_ALPHA),
        font=load_font(48),
        anchor="ls",
    )
    return Image.alpha_composite(image, overlay)


def preview_size(width: int, height: int, max_side: int = PREVIEW_MAX_SIDE) -> "tuple[int, int]":
    """Scaled size for displaying an image, never upscaling."""
    scale = min(1.0, max_side / max(width, height))
    return round(width * scale), round(height * scale)


def describe_image(image: Image.Image) -> str:
    """Short size label such as '480×320'."""
    return f"{image.size[0]}×{image.size[1]}"
