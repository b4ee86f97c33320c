"""Main pattern processor orchestrating the complete pipeline.

AIDEV-NOTE: This module runs image -> sample grid -> first match ->
reduced palette -> second match -> rendered raster. It is a pure function
of (image, palette, config); state tracking lives in pattern_controller.
"""

from typing import Callable, Optional

import numpy as np
from PIL import Image

from models import Palette, PatternConfig, PatternResult, PipelineState

from .layout import compute_layout
from .matching import NearestColorMatcher
from .quantization import count_occurrences, reduce_palette
from .rendering import render_pattern
from .sampling import sample_image

StageCallback = Callable[[PipelineState], None]


class PatternProcessor:
    """Converts images into palette-constrained, annotated grid patterns."""

    def __init__(
        self,
        config: PatternConfig | None = None,
        matcher: NearestColorMatcher | None = None,
        on_stage: Optional[StageCallback] = None,
    ):
        self.config = config or PatternConfig()
        self.matcher = matcher or NearestColorMatcher()
        self.on_stage = on_stage

    def _enter(self, state: PipelineState):
        print(state.value)
        if self.on_stage is not None:
            self.on_stage(state)

    def sample(self, image: Image.Image) -> np.ndarray:
        """Reduce an image to its N x N sample grid."""
        return sample_image(image, self.config.grid_size)

    def match(self, grid: np.ndarray, palette: Palette) -> np.ndarray:
        """Nearest palette index for every grid cell."""
        return self.matcher.match_all(grid, palette)

    def process(
        self,
        image: Image.Image,
        palette: Palette,
        source_name: str = "",
    ) -> PatternResult:
        """Execute the complete pattern pipeline.

        Args:
            image: Input image (RGBA preferred)
            palette: Full palette to quantize against
            source_name: Label for the input, carried into the result

        Returns:
            PatternResult with the rendered raster and match data

        Raises:
            InvalidConfigError: If the config is invalid or the image is
                smaller than the grid
            RenderError: If drawing the raster fails
        """
        config = self.config
        config.validate()
        n = config.grid_size

        self._enter(PipelineState.SAMPLING)
        grid = self.sample(image)
        print(f"Sampled {image.size[0]}x{image.size[1]} image to {n}x{n} grid.")

        self._enter(PipelineState.MATCHING_FIRST)
        first_indices = self.match(grid, palette)
        first_counts = count_occurrences(first_indices, len(palette))

        self._enter(PipelineState.REDUCING)
        reduced, kept = reduce_palette(palette, first_counts, config.max_colors)
        print(
            f"Reduced palette to {len(reduced)} colors "
            f"({int(np.count_nonzero(first_counts))} used of {len(palette)})."
        )

        self._enter(PipelineState.MATCHING_SECOND)
        indices = self.match(grid, reduced)
        counts = count_occurrences(indices, len(reduced))

        self._enter(PipelineState.RENDERING)
        image_out = render_pattern(indices, n, reduced, counts, config)
        layout = compute_layout(n, len(reduced), config)
        print(f"Rendered {layout.width}x{layout.height} pattern.")

        return PatternResult(
            image=image_out,
            palette=reduced,
            indices=indices,
            counts=counts,
            kept_indices=tuple(kept),
            layout=layout,
            grid_size=n,
            source_name=source_name,
        )
