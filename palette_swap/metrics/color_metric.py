from __future__ import annotations
from typing import Sequence, Tuple, Union
import math
import numpy as np

from palette_swap.config import NEAREST_CHUNK
from palette_swap.errors import InvalidArgument

RGBTuple = Tuple[int, int, int]
ColorLike = Union[Sequence[int], np.ndarray]


def as_rgb_tuple(value: ColorLike) -> RGBTuple:
    """Coerce a 3+ length sequence or array row to an (int, int, int) tuple."""
    if len(value) < 3:
        raise InvalidArgument("sequence too small for RGB")
    return (int(value[0]), int(value[1]), int(value[2]))


def palette_array(palette: Sequence[ColorLike]) -> np.ndarray:
    """(K, 3) float64 array of palette colours. Empty palettes are rejected."""
    if len(palette) == 0:
        raise InvalidArgument("palette is empty")
    return np.array([as_rgb_tuple(c) for c in palette], dtype=np.float64)


def distance(a: ColorLike, b: ColorLike) -> float:
    r1, g1, b1 = as_rgb_tuple(a)
    r2, g2, b2 = as_rgb_tuple(b)
    return math.sqrt((r2 - r1) ** 2 + (g2 - g1) ** 2 + (b2 - b1) ** 2)


def nearest(pixel: ColorLike, palette: Sequence[ColorLike]) -> int:
    """
    Index of the palette colour closest to pixel.
    Strict comparison, so ties resolve to the lowest index.
    """
    if len(palette) == 0:
        raise InvalidArgument("nearest() needs a non-empty palette")
    best_index = 0
    best_distance = math.inf
    for index, color in enumerate(palette):
        d = distance(pixel, color)
        if d < best_distance:
            best_distance = d
            best_index = index
    return best_index


def distances_to(pixels: np.ndarray, color: ColorLike) -> np.ndarray:
    """Euclidean distance of every (N, 3+) pixel row to a single colour. Returns (N,) float64."""
    rgb = pixels[:, :3].astype(np.float64)
    diff = rgb - np.array(as_rgb_tuple(color), dtype=np.float64)[None, :]
    return np.sqrt((diff * diff).sum(axis=1))


def nearest_indices(
    pixels: np.ndarray,              # (N, 3+) uint8
    palette: Sequence[ColorLike],
    chunk: int = NEAREST_CHUNK,
) -> np.ndarray:
    """
    Vectorized nearest() over many pixels. Chunked over N to bound memory.
    np.argmin returns the first minimum, matching nearest()'s tie-break.
    """
    pal = palette_array(palette)     # (K, 3)
    rgb = pixels[:, :3]
    n = rgb.shape[0]
    out = np.empty((n,), dtype=np.int64)
    for s in range(0, n, chunk):
        e = min(s + chunk, n)
        block = rgb[s:e].astype(np.float64)
        # (k,1,3) - (1,K,3) -> (k,K,3)
        diff = block[:, None, :] - pal[None, :, :]
        d = np.sqrt((diff * diff).sum(axis=2))   # (k, K)
        out[s:e] = np.argmin(d, axis=1)
    return out
