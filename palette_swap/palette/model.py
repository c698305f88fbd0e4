from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence

from palette_swap.metrics.color_metric import RGBTuple, as_rgb_tuple


@dataclass
class PaletteEntry:
    """One palette colour and the share of sampled pixels nearest to it (0..100)."""

    color: RGBTuple
    percentage: float


Palette = List[PaletteEntry]


def build_palette(colors: Sequence[RGBTuple], percentages: Sequence[float]) -> Palette:
    if len(colors) != len(percentages):
        raise ValueError(f"{len(colors)} colours but {len(percentages)} percentages")
    return [PaletteEntry(color=as_rgb_tuple(c), percentage=float(p)) for c, p in zip(colors, percentages)]


def palette_colors(palette: Sequence[PaletteEntry]) -> List[RGBTuple]:
    return [entry.color for entry in palette]


def swap_entries(palette: Palette, index_a: int, index_b: int) -> None:
    """Exchange colour and percentage between two entries, in place."""
    a, b = palette[index_a], palette[index_b]
    a.color, b.color = b.color, a.color
    a.percentage, b.percentage = b.percentage, a.percentage
