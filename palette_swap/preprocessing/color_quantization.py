from __future__ import annotations
from collections import deque
from typing import Deque, List, Optional, Sequence, Union
import numpy as np

from palette_swap.config import BACKFILL_STRIDE
from palette_swap.errors import InvalidArgument
from palette_swap.metrics.color_metric import RGBTuple

R, G, B = 0, 1, 2


def _as_pixel_rows(pixels: Union[np.ndarray, Sequence[Sequence[int]]]) -> np.ndarray:
    arr = np.asarray(pixels, dtype=np.int32)
    if arr.size == 0:
        return arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] < 3:
        raise InvalidArgument(f"expected (N, 3) pixels, got shape {arr.shape}")
    return arr[:, :3]


def split_channel(bucket: np.ndarray) -> int:
    """
    Channel to split on. Not a symmetric argmax: G must beat both R and B
    strictly, then B must beat R strictly, otherwise R.
    """
    ranges = bucket.max(axis=0) - bucket.min(axis=0)
    r_range, g_range, b_range = int(ranges[R]), int(ranges[G]), int(ranges[B])
    if g_range > r_range and g_range > b_range:
        return G
    if b_range > r_range:
        return B
    return R


def split_bucket(bucket: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Stable sort on the split channel, cut at floor(len/2)."""
    channel = split_channel(bucket)
    ordered = bucket[np.argsort(bucket[:, channel], kind="stable")]
    median = len(ordered) // 2
    return ordered[:median], ordered[median:]


def bucket_mean(bucket: np.ndarray) -> RGBTuple:
    # round half up
    mean = np.floor(bucket.mean(axis=0, dtype=np.float64) + 0.5).astype(np.int64)
    return (int(mean[R]), int(mean[G]), int(mean[B]))


def median_cut_buckets(pixels: np.ndarray, target_count: int) -> List[np.ndarray]:
    """
    FIFO median cut: pop the head bucket, split it, push both halves to the tail.
    Buckets of size 1 cannot split; they are requeued untouched and the loop
    stops once no bucket of size >= 2 is left.
    """
    buckets: Deque[np.ndarray] = deque([pixels])
    splittable = 1 if len(pixels) > 1 else 0
    while len(buckets) < target_count and splittable > 0:
        bucket = buckets.popleft()
        if len(bucket) == 0:
            continue
        if len(bucket) == 1:
            buckets.append(bucket)
            continue
        splittable -= 1
        for half in split_bucket(bucket):
            buckets.append(half)
            if len(half) > 1:
                splittable += 1
    return [b for b in buckets if len(b) > 0]


def backfill(
    colors: List[RGBTuple],
    pixels: np.ndarray,
    target_count: int,
    rng: np.random.Generator,
    stride: int = BACKFILL_STRIDE,
) -> List[RGBTuple]:
    """Top up colors with random picks (with replacement) from every stride-th pixel."""
    coarse = pixels[::stride]
    out = list(colors)
    while len(out) < target_count and len(coarse) > 0:
        pick = coarse[int(rng.integers(len(coarse)))]
        out.append((int(pick[R]), int(pick[G]), int(pick[B])))
    return out


def quantize(
    pixels: Union[np.ndarray, Sequence[Sequence[int]]],
    target_count: int,
    rng: Optional[np.random.Generator] = None,
) -> List[RGBTuple]:
    """
    Median-cut palette of at most target_count colours from sampled pixels.
    - buckets are split in FIFO order, not largest-range first
    - each surviving bucket contributes its rounded mean, in queue order
    - an under-full result is backfilled with random sampled pixels (rng)
    Empty input yields an empty list; callers treat that as extraction failure.
    """
    if target_count < 1:
        raise InvalidArgument(f"target_count must be >= 1, got {target_count}")
    rows = _as_pixel_rows(pixels)
    if len(rows) == 0:
        return []

    colors = [bucket_mean(b) for b in median_cut_buckets(rows, target_count)]

    if len(colors) < target_count:
        if rng is None:
            rng = np.random.default_rng()
        colors = backfill(colors, rows, target_count, rng)

    return colors[:target_count]
