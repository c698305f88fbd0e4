from typing import Tuple
import numpy as np
import cv2

from palette_swap.config import MAX_EXTRACT_EDGE


def compute_extraction_size(h: int, w: int, max_edge: int = MAX_EXTRACT_EDGE) -> Tuple[int, int]:
    """
    Decide the (H, W) of the extraction working copy.
    The longer edge is scaled down to max_edge with aspect preserved; the other
    edge keeps its fractional scale and is only truncated to whole pixels.
    Images already within bounds are returned as is.
    """
    if w > h:
        if w > max_edge:
            return max(1, int(h / w * max_edge)), max_edge
    else:
        if h > max_edge:
            return max_edge, max(1, int(w / h * max_edge))
    return h, w


def downscale_for_extraction(
    img: np.ndarray,
    max_edge: int = MAX_EXTRACT_EDGE,
    interpolation: int = cv2.INTER_AREA,
) -> np.ndarray:
    """Resize (H, W, C) so its longer edge is at most max_edge. Channels (incl. alpha) are kept."""
    h, w = img.shape[:2]
    target_h, target_w = compute_extraction_size(h, w, max_edge)
    if (target_h, target_w) == (h, w):
        return img
    return cv2.resize(img, (target_w, target_h), interpolation=interpolation)
