from __future__ import annotations
from typing import Tuple
import numpy as np

from palette_swap.config import NEAREST_CHUNK, SWAP_THRESHOLD
from palette_swap.errors import InvalidArgument
from palette_swap.metrics.color_metric import ColorLike, as_rgb_tuple, distances_to


def swap_masks(
    buffer: np.ndarray,
    color_a: ColorLike,
    color_b: ColorLike,
    threshold: float = SWAP_THRESHOLD,
    chunk: int = NEAREST_CHUNK,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    (to_b, to_a) boolean (H, W) masks.
    A-membership is tested first, so a pixel within threshold of both goes to B.
    Distances are computed chunk by chunk over the flattened pixels.
    """
    if buffer.ndim != 3 or buffer.shape[2] not in (3, 4):
        raise InvalidArgument(f"expected (H,W,3|4) pixel buffer, got shape {buffer.shape}")
    h, w = buffer.shape[:2]
    rows = buffer.reshape(h * w, buffer.shape[2])
    to_b = np.empty((h * w,), dtype=bool)
    to_a = np.empty((h * w,), dtype=bool)
    for s in range(0, h * w, chunk):
        e = min(s + chunk, h * w)
        near_a = distances_to(rows[s:e], color_a) <= threshold
        near_b = distances_to(rows[s:e], color_b) <= threshold
        to_b[s:e] = near_a
        to_a[s:e] = near_b & ~near_a
    return to_b.reshape(h, w), to_a.reshape(h, w)


def swap(
    buffer: np.ndarray,
    color_a: ColorLike,
    color_b: ColorLike,
    threshold: float = SWAP_THRESHOLD,
) -> np.ndarray:
    """
    Full-resolution swap: pixels near A become B, pixels near B become A.
    Returns a new buffer; alpha (if present) is left as is.
    """
    to_b, to_a = swap_masks(buffer, color_a, color_b, threshold)
    out = buffer.copy()
    out[to_b, :3] = np.array(as_rgb_tuple(color_b), dtype=buffer.dtype)
    out[to_a, :3] = np.array(as_rgb_tuple(color_a), dtype=buffer.dtype)
    return out
