"""Frequency-based palette reduction.

AIDEV-NOTE: After the first matching pass we keep only the K most used
palette entries. Ranking is by count descending with the original palette
index ascending as an explicit tie-break, then the survivors go back into
palette order so the legend never depends on popularity rank.
"""

import numpy as np

from models import Palette


def count_occurrences(indices: np.ndarray, palette_size: int) -> np.ndarray:
    """Count how often each palette index appears in an index map.

    Returns:
        Integer array of length palette_size (zero for unused entries)
    """
    return np.bincount(np.asarray(indices, dtype=np.intp), minlength=palette_size)


def select_top_k(counts: "np.ndarray | list[int]", max_colors: int) -> "list[int]":
    """Pick the indices of the most frequent palette entries.

    Args:
        counts: Occurrence count per palette index
        max_colors: Maximum number of entries to keep (K)

    Returns:
        Up to K indices with a non-zero count, in ascending index order
    """
    used = [(index, int(count)) for index, count in enumerate(counts) if count > 0]
    ranked = sorted(used, key=lambda item: (-item[1], item[0]))
    top = [index for index, _ in ranked[:max_colors]]
    return sorted(top)


def reduce_palette(
    palette: Palette,
    counts: "np.ndarray | list[int]",
    max_colors: int,
) -> "tuple[Palette, list[int]]":
    """Restrict a palette to its K most used entries.

    Returns:
        Tuple of (reduced palette, original indices of the kept entries)
    """
    keep = select_top_k(counts, max_colors)
    return palette.subset(keep), keep
