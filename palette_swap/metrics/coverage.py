from __future__ import annotations
from typing import List, Sequence
import numpy as np

from palette_swap.config import ESTIMATE_STRIDE, NEAREST_CHUNK
from palette_swap.errors import InvalidArgument
from palette_swap.metrics.color_metric import ColorLike, nearest_indices
from palette_swap.preprocessing.sampling import flat_channels


def coverage_counts(
    buffer: np.ndarray,
    palette: Sequence[ColorLike],
    stride: int = ESTIMATE_STRIDE,
    chunk: int = NEAREST_CHUNK,
) -> np.ndarray:
    """
    Per-palette-index counts over every stride-th pixel (alpha ignored).
    Counted chunk by chunk and summed, so chunks are independent.
    """
    if len(palette) == 0:
        raise InvalidArgument("cannot estimate coverage against an empty palette")
    if stride < 1:
        raise InvalidArgument(f"stride must be >= 1, got {stride}")
    sampled = flat_channels(buffer)[::stride]
    counts = np.zeros((len(palette),), dtype=np.int64)
    for s in range(0, len(sampled), chunk):
        idx = nearest_indices(sampled[s : s + chunk], palette, chunk=chunk)
        counts += np.bincount(idx, minlength=len(palette))
    return counts


def estimate(
    buffer: np.ndarray,
    palette: Sequence[ColorLike],
    stride: int = ESTIMATE_STRIDE,
) -> List[float]:
    """Percentage of sampled pixels nearest to each palette colour, in palette order."""
    counts = coverage_counts(buffer, palette, stride=stride)
    total = int(counts.sum())
    if total == 0:
        raise InvalidArgument("no pixels sampled; image too small to estimate coverage")
    return [float(c) / total * 100.0 for c in counts]
