"""Image processing pipeline for image-to-pattern conversion.

AIDEV-NOTE: This package handles the complete pipeline from a picture to
an annotated bead/cross-stitch pattern. Organized into modular components:
- processor: Main PatternProcessor orchestrator
- sampling: Square crop and block-average downsampling
- matching: Nearest palette color lookup
- quantization: Frequency-based palette reduction
- layout: Canvas geometry for grid and legend
- rendering: Raster drawing of the pattern
- palette: Palette file loading
- utils: Image loading, demo image and preview helpers
"""

from .palette import bundled_palettes, load_palette
from .processor import PatternProcessor
from .utils import load_image, make_demo_image

__all__ = [
    "PatternProcessor",
    "bundled_palettes",
    "load_image",
    "load_palette",
    "make_demo_image",
]
