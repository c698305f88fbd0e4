from __future__ import annotations
import numpy as np

from palette_swap.config import SAMPLE_STRIDE_BYTES, ALPHA_THRESHOLD
from palette_swap.errors import InvalidArgument


def flat_channels(buffer: np.ndarray) -> np.ndarray:
    """
    View an (H, W, 3|4) or (N, 3|4) uint8 buffer as (N, 4) RGBA rows.
    RGB input is treated as fully opaque.
    """
    if buffer.ndim not in (2, 3) or buffer.shape[-1] not in (3, 4):
        raise InvalidArgument(f"expected (H,W,3|4) pixel buffer, got shape {buffer.shape}")
    rows = buffer.reshape(-1, buffer.shape[-1])
    if rows.shape[1] == 4:
        return rows
    alpha = np.full((rows.shape[0], 1), 255, dtype=rows.dtype)
    return np.concatenate([rows, alpha], axis=1)


def sample(
    buffer: np.ndarray,
    stride_bytes: int = SAMPLE_STRIDE_BYTES,
    alpha_threshold: int = ALPHA_THRESHOLD,
) -> np.ndarray:
    """
    Strided opaque-pixel sample for palette extraction.
    Walks the RGBA byte stream every stride_bytes bytes and keeps pixels with
    alpha strictly above alpha_threshold. Returns (N, 3) uint8.
    Expects the buffer to be downscaled already (see resize_crop).
    """
    if stride_bytes <= 0 or stride_bytes % 4 != 0:
        raise InvalidArgument(f"stride_bytes must be a positive multiple of 4, got {stride_bytes}")
    rgba = flat_channels(buffer)[:: stride_bytes // 4]
    keep = rgba[:, 3] > alpha_threshold
    return np.ascontiguousarray(rgba[keep, :3], dtype=np.uint8)
