from __future__ import annotations
from typing import List, Sequence
import numpy as np
import cv2

from palette_swap.config import BAR_WIDTH, BAR_HEIGHT, BAR_MIN_SEGMENT
from palette_swap.metrics.color_metric import RGBTuple
from palette_swap.palette.model import PaletteEntry

BLACK: RGBTuple = (0, 0, 0)
WHITE: RGBTuple = (255, 255, 255)


def rgb_to_hex(rgb: RGBTuple) -> str:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{int(rgb[0]):02x}{int(rgb[1]):02x}{int(rgb[2]):02x}"


def is_light_color(rgb: RGBTuple) -> bool:
    # BT.601 weights, same as luma elsewhere
    brightness = (rgb[0] * 299 + rgb[1] * 587 + rgb[2] * 114) / 1000
    return brightness > 128


def text_color_for(rgb: RGBTuple) -> RGBTuple:
    return BLACK if is_light_color(rgb) else WHITE


def segment_label(entry: PaletteEntry) -> str:
    return f"{entry.percentage:.1f}%"


def segment_title(entry: PaletteEntry) -> str:
    r, g, b = entry.color
    return f"RGB({r}, {g}, {b}) - {rgb_to_hex(entry.color)}"


def segment_widths(
    palette: Sequence[PaletteEntry],
    width: int = BAR_WIDTH,
    min_width: int = BAR_MIN_SEGMENT,
) -> List[int]:
    """
    Pixel width per entry, proportional to percentage.
    Non-zero entries get at least min_width; the bar may then overflow
    width, so the result is rescaled to fit exactly.
    """
    raw = [
        max(float(min_width), e.percentage / 100.0 * width) if e.percentage > 0 else 0.0
        for e in palette
    ]
    total = sum(raw)
    if total <= 0:
        return [0 for _ in palette]
    scaled = [r * width / total for r in raw]
    widths = [int(round(s)) for s in scaled]
    # push rounding drift onto the widest segment
    widest = int(np.argmax(widths))
    widths[widest] += width - sum(widths)
    return widths


def draw_palette_bar(
    palette: Sequence[PaletteEntry],
    selection: Sequence[int] = (),
    width: int = BAR_WIDTH,
    height: int = BAR_HEIGHT,
    border: int = 3,
) -> np.ndarray:
    """
    Render the palette as a horizontal bar of colour segments (RGB uint8).
    Each segment shows its percentage in a contrasting colour; selected
    entries get an inset border.
    """
    bar_bgr = np.full((height, width, 3), 255, dtype=np.uint8)
    x = 0
    for index, (entry, seg_w) in enumerate(zip(palette, segment_widths(palette, width))):
        if seg_w <= 0:
            continue
        r, g, b = entry.color
        cv2.rectangle(bar_bgr, (x, 0), (x + seg_w - 1, height - 1), (int(b), int(g), int(r)), -1)

        tr, tg, tb = text_color_for(entry.color)
        label = segment_label(entry)
        scale = 0.45
        (tw, th), _ = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, scale, 1)
        tx = x + max((seg_w - tw) // 2, 2)
        ty = (height + th) // 2
        cv2.putText(bar_bgr, label, (tx, ty), cv2.FONT_HERSHEY_SIMPLEX, scale, (tb, tg, tr), 1, cv2.LINE_AA)

        if index in selection:
            cv2.rectangle(
                bar_bgr,
                (x + border // 2, border // 2),
                (x + seg_w - 1 - border // 2, height - 1 - border // 2),
                (tb, tg, tr),
                border,
            )
        x += seg_w
    return cv2.cvtColor(bar_bgr, cv2.COLOR_BGR2RGB)
