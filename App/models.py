"""Data models, constants and errors for the pixel pattern maker."""

import io
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np
    from PIL import Image

# Configuration file path
CONFIG_FILE = Path.home() / ".pixel_pattern_config.json"

# Exported pattern file name
OUTPUT_FILENAME = "pixel_art.png"

# Bundled palette shown first in the palette selector
DEFAULT_PALETTE = "basic"


class LegendPosition(Enum):
    """Where the color legend is placed relative to the grid."""

    RIGHT = "right"
    BOTTOM = "bottom"


class PipelineState(Enum):
    """Stages of a single pattern run.

    AIDEV-NOTE: A run walks these in order; any stage may jump to ERROR.
    DONE and ERROR are terminal until the next trigger resets to IDLE.
    """

    IDLE = "Idle"
    LOADING = "Loading palette..."
    SAMPLING = "Sampling image..."
    MATCHING_FIRST = "Matching colors (pass 1)..."
    REDUCING = "Reducing palette..."
    MATCHING_SECOND = "Matching colors (pass 2)..."
    RENDERING = "Rendering pattern..."
    DONE = "Done"
    ERROR = "Error"


# --- Errors ---


class PatternError(Exception):
    """Base class for failures that abort a pattern run."""


class ResourceLoadError(PatternError):
    """Palette could not be fetched or parsed."""


class InputMissingError(PatternError):
    """A run was triggered without an input image."""


class ImageLoadError(PatternError):
    """Input image file could not be decoded."""


class RenderError(PatternError):
    """Drawing the output raster failed."""


class InvalidConfigError(PatternError, ValueError):
    """Configuration values are out of range for the given input."""


@dataclass
class PatternConfig:
    """User-adjustable pattern settings."""

    # Grid
    grid_size: int = 50  # cells per side (N)
    max_colors: int = 20  # upper bound on reduced palette size (K)

    # Labels
    show_names: bool = True
    font_size: int = 10  # px

    # Geometry
    cell_size: int = 30  # px per cell edge
    legend_position: LegendPosition = LegendPosition.RIGHT

    # Legend swatch and gap sizing, as multiples of cell_size
    swatch_width_ratio: float = 3.0
    swatch_height_ratio: float = 1.0
    gap_x_ratio: float = 0.5
    gap_y_ratio: float = 0.5

    # Palette file path or URL; empty selects the bundled default
    palette_source: str = ""

    def validate(self):
        """Raise InvalidConfigError if any value is out of range."""
        for name in ("grid_size", "max_colors", "font_size", "cell_size"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise InvalidConfigError(f"{name} must be a positive integer, got {value!r}")
        for name in (
            "swatch_width_ratio",
            "swatch_height_ratio",
            "gap_x_ratio",
            "gap_y_ratio",
        ):
            if getattr(self, name) < 0:
                raise InvalidConfigError(f"{name} must not be negative")
        if not isinstance(self.legend_position, LegendPosition):
            raise InvalidConfigError(
                f"legend_position must be one of "
                f"{[p.value for p in LegendPosition]}, got {self.legend_position!r}"
            )


@dataclass(frozen=True)
class Palette:
    """Ordered, named reference colors.

    AIDEV-NOTE: Colors are float RGB triples in [0, 1]. An entry's index is
    its position, and that index is what the matchers return.
    """

    colors: "tuple[tuple[float, float, float], ...]"
    names: "tuple[str, ...]"

    def __len__(self) -> int:
        return len(self.colors)

    def subset(self, indices: "list[int]") -> "Palette":
        """Return a new palette holding only the given entries, in order."""
        return Palette(
            colors=tuple(self.colors[i] for i in indices),
            names=tuple(self.names[i] for i in indices),
        )


@dataclass(frozen=True)
class RenderLayout:
    """Output canvas geometry derived from grid size and config.

    AIDEV-NOTE: All values are integer pixels. legend_rows/legend_cols
    describe the legend table for either layout.
    """

    legend_position: LegendPosition
    cell_size: int
    margin: int  # width of the numbered gutters
    grid_px: int  # edge length of the cell grid
    swatch_width: int
    swatch_height: int
    gap_x: int
    gap_y: int
    legend_rows: int
    legend_cols: int
    legend_x: int  # top-left of the legend area
    legend_y: int
    width: int
    height: int


@dataclass(frozen=True)
class LegendSlot:
    """Position of one legend swatch on the canvas."""

    index: int  # reduced palette index
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class GridLine:
    """A single grid line in canvas coordinates."""

    vertical: bool
    index: int  # 0..N
    start: "tuple[int, int]"
    end: "tuple[int, int]"
    width: int


@dataclass(frozen=True)
class PatternResult:
    """Result of one successful pattern run.

    AIDEV-NOTE: Ownership of the image passes to the caller once this is
    returned. Nothing in the pipeline touches it afterwards.
    """

    image: "Image.Image"  # rendered RGB raster
    palette: Palette  # reduced palette, ascending original order
    indices: "np.ndarray"  # second-pass index per cell, row-major
    counts: "np.ndarray"  # second-pass count per reduced entry
    kept_indices: "tuple[int, ...]"  # reduced entry -> original palette index
    layout: RenderLayout
    grid_size: int
    source_name: str = ""

    def to_png_bytes(self) -> bytes:
        """Encode the raster as lossless PNG."""
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()

    def save(self, file_path: "str | Path") -> Path:
        """Write the raster as PNG to file_path."""
        path = Path(file_path)
        path.write_bytes(self.to_png_bytes())
        return path
