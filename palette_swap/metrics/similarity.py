# palette_swap/metrics/similarity.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import numpy as np
from skimage.metrics import structural_similarity as ssim

from palette_swap.metrics.color_metric import RGBTuple


@dataclass(frozen=True)
class SwapReport:
    color_a: RGBTuple
    color_b: RGBTuple
    threshold: float
    pixels: int
    changed_pixels: int
    changed_fraction: float
    mse: float
    ssim: Optional[float]
    runtime_ms: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def mse(a: np.ndarray, b: np.ndarray) -> float:
    a32 = a[..., :3].astype(np.float32)
    b32 = b[..., :3].astype(np.float32)
    return float(np.mean((a32 - b32) ** 2))

def ssim_rgb(a: np.ndarray, b: np.ndarray) -> Optional[float]:
    a_rgb, b_rgb = a[..., :3], b[..., :3]
    # gaussian-weighted SSIM needs an 11x11 window; None when the image is smaller
    if min(a_rgb.shape[:2]) < 11:
        return None
    # skimage >= 0.19 uses channel_axis instead of multichannel
    a_f = (a_rgb.astype(np.float32) / 255.0).clip(0, 1)
    b_f = (b_rgb.astype(np.float32) / 255.0).clip(0, 1)
    val = ssim(a_f, b_f, channel_axis=2, data_range=1.0, gaussian_weights=True, use_sample_covariance=False)
    return float(val)

def changed_pixels(a: np.ndarray, b: np.ndarray) -> int:
    return int(np.any(a[..., :3] != b[..., :3], axis=-1).sum())

def swap_report(
    before: np.ndarray,
    after: np.ndarray,
    color_a: RGBTuple,
    color_b: RGBTuple,
    threshold: float,
    runtime_ms: float,
) -> SwapReport:
    pixels = int(before.shape[0] * before.shape[1])
    changed = changed_pixels(before, after)
    return SwapReport(
        color_a=color_a,
        color_b=color_b,
        threshold=float(threshold),
        pixels=pixels,
        changed_pixels=changed,
        changed_fraction=changed / pixels if pixels else 0.0,
        mse=mse(before, after),
        ssim=ssim_rgb(before, after),
        runtime_ms=round(runtime_ms, 2),
    )
