"""Nearest-color palette matching.

AIDEV-NOTE: Distance is plain squared Euclidean distance in RGB (0-1).
Ties always go to the lowest palette index, for both the scalar and the
vectorized path.
"""

import numpy as np

from models import Palette


def palette_array(palette: Palette) -> np.ndarray:
    """Palette colors as a float array of shape (P, 3)."""
    return np.asarray(palette.colors, dtype=np.float64).reshape(-1, 3)


def nearest_index(color: "tuple[float, float, float]", palette: Palette) -> int:
    """Index of the palette entry closest to a single color.

    Args:
        color: RGB triple with channels in [0, 1]
        palette: Candidate palette

    Returns:
        Palette index; the first entry wins on equal distance
    """
    r, g, b = color
    best = 0
    best_distance = float("inf")
    for index, (pr, pg, pb) in enumerate(palette.colors):
        dr = r - pr
        dg = g - pg
        db = b - pb
        distance = dr * dr + dg * dg + db * db
        if distance < best_distance:
            best_distance = distance
            best = index
    return best


class NearestColorMatcher:
    """Brute-force nearest palette color lookup.

    Callers only depend on match_all(), so a faster index (k-d tree, lookup
    table) can replace this class without touching the pipeline.
    """

    def nearest_index(self, color: "tuple[float, float, float]", palette: Palette) -> int:
        return nearest_index(color, palette)

    def match_all(self, grid: np.ndarray, palette: Palette) -> np.ndarray:
        """Map every grid cell to its nearest palette index.

        Args:
            grid: Sample grid of shape (cells, 3)
            palette: Candidate palette (at least one entry)

        Returns:
            Integer array of shape (cells,)
        """
        colors = palette_array(palette)
        diff = grid[:, None, :] - colors[None, :, :]
        distances = (diff * diff).sum(axis=2)
        # argmin returns the first minimum, matching nearest_index()
        return np.argmin(distances, axis=1).astype(np.intp)
