# palette_swap/session.py
from __future__ import annotations
import threading
import time
from typing import List, Optional
import numpy as np

from palette_swap.config import DEFAULT_PALETTE_SIZE, MAX_SELECTION, SWAP_THRESHOLD
from palette_swap.errors import ExtractionFailed, InvalidArgument, PreconditionFailed
from palette_swap.io_utils import encode_png, ensure_rgba
from palette_swap.metrics.coverage import estimate
from palette_swap.metrics.similarity import SwapReport, swap_report
from palette_swap.palette.model import Palette, PaletteEntry, build_palette, palette_colors, swap_entries
from palette_swap.preprocessing.color_quantization import quantize
from palette_swap.preprocessing.resize_crop import downscale_for_extraction
from palette_swap.preprocessing.sampling import sample
from palette_swap.recolor.swap import swap as swap_pixels


def extract_palette(
    image: np.ndarray,
    color_count: int = DEFAULT_PALETTE_SIZE,
    rng: Optional[np.random.Generator] = None,
) -> Palette:
    """
    Palette of color_count entries for an (H, W, 3|4) image.
    Colours come from a downscaled, strided, opaque-only sample; percentages
    are estimated on the full-resolution image.
    """
    rgba = ensure_rgba(image)
    small = downscale_for_extraction(rgba)
    colors = quantize(sample(small), color_count, rng=rng)
    if not colors:
        raise ExtractionFailed("Failed to extract palette")
    return build_palette(colors, estimate(rgba, colors))


class PaletteSession:
    """
    Single-owner state for one loaded image: working buffer, palette, selection.

    Operations validate first and mutate only on success, so a failed call
    leaves the session as it was. A lock serialises callers that share a
    session (e.g. concurrent UI events).
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.buffer: Optional[np.ndarray] = None
        self.palette: Palette = []
        self.selection: List[int] = []

    # --------- state ----------
    @property
    def loaded(self) -> bool:
        return self.buffer is not None

    @property
    def can_swap(self) -> bool:
        return len(self.selection) == MAX_SELECTION and len(set(self.selection)) == MAX_SELECTION

    @property
    def colors(self):
        return palette_colors(self.palette)

    @property
    def percentages(self) -> List[float]:
        return [e.percentage for e in self.palette]

    def load(
        self,
        image: np.ndarray,
        color_count: int = DEFAULT_PALETTE_SIZE,
        rng: Optional[np.random.Generator] = None,
    ) -> Palette:
        """Extract a palette from image and adopt a copy of it as the working buffer."""
        rgba = ensure_rgba(image)
        palette = extract_palette(rgba, color_count, rng=rng)
        with self._lock:
            self.buffer = rgba.copy()
            self.palette = palette
            self.selection = []
        return palette

    def reset(self) -> None:
        with self._lock:
            self.buffer = None
            self.palette = []
            self.selection = []

    # --------- selection ----------
    def toggle(self, index: int) -> List[int]:
        """Deselect a selected index, or select it while fewer than two are selected."""
        with self._lock:
            if self.buffer is None:
                raise PreconditionFailed("no image loaded")
            if not 0 <= index < len(self.palette):
                raise InvalidArgument(f"palette index {index} out of range (0..{len(self.palette) - 1})")
            if index in self.selection:
                self.selection = [i for i in self.selection if i != index]
            elif len(self.selection) < MAX_SELECTION:
                self.selection = self.selection + [index]
            return list(self.selection)

    # --------- recolor ----------
    def swap_selected(self, threshold: float = SWAP_THRESHOLD, report: bool = False) -> Optional[SwapReport]:
        with self._lock:
            if len(self.selection) != MAX_SELECTION:
                raise PreconditionFailed(f"select exactly two colours to swap (have {len(self.selection)})")
            index_a, index_b = self.selection
            return self.swap(index_a, index_b, threshold=threshold, report=report)

    def swap(
        self,
        index_a: int,
        index_b: int,
        threshold: float = SWAP_THRESHOLD,
        report: bool = False,
    ) -> Optional[SwapReport]:
        """
        Swap two palette colours in both the palette and the working buffer.
        Percentages are re-estimated from the new buffer afterwards; the
        metadata swap alone does not match the pixel-level result.
        With report=True, also compare the buffers before and after (MSE, SSIM).
        """
        with self._lock:
            if self.buffer is None:
                raise PreconditionFailed("no image loaded")
            n = len(self.palette)
            if index_a == index_b:
                raise PreconditionFailed("cannot swap a colour with itself")
            if not (0 <= index_a < n and 0 <= index_b < n):
                raise PreconditionFailed(f"swap indices ({index_a}, {index_b}) out of range for {n} colours")

            color_a = self.palette[index_a].color
            color_b = self.palette[index_b].color

            t0 = time.perf_counter()
            swapped = swap_pixels(self.buffer, color_a, color_b, threshold=threshold)
            palette = [PaletteEntry(e.color, e.percentage) for e in self.palette]
            swap_entries(palette, index_a, index_b)
            fresh = estimate(swapped, palette_colors(palette))
            for entry, pct in zip(palette, fresh):
                entry.percentage = pct
            runtime_ms = (time.perf_counter() - t0) * 1000.0

            before = self.buffer
            self.buffer = swapped
            self.palette = palette
            self.selection = []
            if not report:
                return None
            return swap_report(before, swapped, color_a, color_b, threshold, runtime_ms)

    # --------- export ----------
    def export(self) -> np.ndarray:
        with self._lock:
            if self.buffer is None:
                raise PreconditionFailed("no image loaded")
            return self.buffer.copy()

    def export_png(self) -> bytes:
        return encode_png(self.export())
