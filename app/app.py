# app/app.py
import sys
from pathlib import Path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

import time
import numpy as np
import gradio as gr

from palette_swap.config import DEFAULT_PALETTE_SIZE, SWAP_THRESHOLD, OUTPUTS_DIR
from palette_swap.errors import PaletteError
from palette_swap.io_utils import save_image_rgba
from palette_swap.palette.render import draw_palette_bar, rgb_to_hex, segment_label, segment_title
from palette_swap.session import PaletteSession

# --------- helpers ----------
def _choice_label(index: int, entry) -> str:
    return f"{index}: {rgb_to_hex(entry.color)} ({segment_label(entry)})"

def _palette_table(session: PaletteSession) -> list:
    return [
        [i, rgb_to_hex(e.color), segment_title(e), round(e.percentage, 2), i in session.selection]
        for i, e in enumerate(session.palette)
    ]

def _render(session: PaletteSession, status: str):
    """Common outputs: preview, palette bar, selection choices, table, swap button, status."""
    if not session.loaded:
        return (
            None, None,
            gr.update(choices=[], value=[]),
            [],
            gr.update(interactive=False),
            status,
        )
    choices = [_choice_label(i, e) for i, e in enumerate(session.palette)]
    selected = [choices[i] for i in session.selection]
    return (
        session.buffer,
        draw_palette_bar(session.palette, session.selection),
        gr.update(choices=choices, value=selected),
        _palette_table(session),
        gr.update(interactive=session.can_swap),
        status,
    )

def _index_of(label: str) -> int:
    return int(label.split(":", 1)[0])

# --------- core handlers ----------
def load_image(image: np.ndarray, color_count: int, session: PaletteSession):
    if session is None:
        session = PaletteSession()
    if image is None:
        session.reset()
        return (session, *_render(session, "Upload an image to extract its palette."))
    t0 = time.perf_counter()
    try:
        session.load(image, color_count=int(color_count))
    except PaletteError as e:
        print(f"✗ extraction failed: {e}")
        return (session, *_render(session, f"Error: {e}. Please try another image."))
    ms = (time.perf_counter() - t0) * 1000.0
    h, w = session.buffer.shape[:2]
    print(f"✓ palette extracted from {w}x{h} image in {ms:.1f} ms")
    return (session, *_render(session, f"Extracted {len(session.palette)} colours in {ms:.1f} ms."))

def change_selection(labels: list, session: PaletteSession):
    if session is None or not session.loaded:
        return (session, *_render(session or PaletteSession(), "Upload an image first."))
    wanted = {_index_of(label) for label in (labels or [])}
    # apply as toggles so the two-colour cap is enforced by the session
    for index in list(session.selection):
        if index not in wanted:
            session.toggle(index)
    for index in sorted(wanted):
        if index not in session.selection:
            session.toggle(index)
    note = "Ready to swap." if session.can_swap else "Select two colours to swap."
    return (session, *_render(session, note))

def run_swap(threshold: float, session: PaletteSession):
    if session is None:
        session = PaletteSession()
    try:
        report = session.swap_selected(threshold=float(threshold), report=True)
    except PaletteError as e:
        return (session, *_render(session, f"Error: {e}"), {"error": str(e)})
    print(f"  ↳ swapped {rgb_to_hex(report.color_a)} <-> {rgb_to_hex(report.color_b)}: "
          f"{report.changed_pixels} px changed")
    return (session, *_render(session, "Swap applied."), report.as_dict())

def export_png(session: PaletteSession):
    if session is None or not session.loaded:
        return None, "Upload an image first."
    path = save_image_rgba(OUTPUTS_DIR / f"palette_swap_{int(time.time())}.png", session.export())
    print(f"✓ exported {path}")
    return str(path), f"Saved {path.name}."

# --------- UI ----------
with gr.Blocks(title="Palette Swap") as demo:
    gr.Markdown("## Palette Swap — Extract & Recolor\nExtract a small palette, pick two colours, swap them in the image.")
    session_state = gr.State(None)

    with gr.Row():
        with gr.Column(scale=1, min_width=320):
            gr.Markdown("### Inputs")
            in_img = gr.Image(type="numpy", image_mode="RGBA", label="Upload image")
            color_count = gr.Slider(2, 24, value=DEFAULT_PALETTE_SIZE, step=1, label="Palette size")
            extract_btn = gr.Button("Extract Palette", variant="primary")
            gr.Markdown("### Swap")
            selection = gr.CheckboxGroup(choices=[], label="Selected colours (max 2)")
            threshold = gr.Slider(0, 120, value=SWAP_THRESHOLD, step=1, label="Swap threshold",
                                  info="RGB distance within which a pixel counts as a palette colour")
            swap_btn = gr.Button("Swap Colours", interactive=False)
            export_btn = gr.Button("Export PNG")
            with gr.Accordion("How swapping works", open=False):
                gr.Markdown(
                    """
                    - Pixels within the threshold of the first colour become the second colour.
                    - Otherwise, pixels within the threshold of the second colour become the first.
                    - Percentages are re-estimated from the swapped image afterwards.
                    """
                )
        with gr.Column(scale=2):
            gr.Markdown("### Outputs")
            status = gr.Markdown()
            bar = gr.Image(type="numpy", label="Palette")
            preview = gr.Image(type="numpy", image_mode="RGBA", label="Current image")
            table = gr.Dataframe(headers=["index", "hex", "rgb", "percentage", "selected"], label="Palette entries")
            report = gr.JSON(label="Last swap (changed pixels, MSE, SSIM, runtime)")
            exported = gr.File(label="Exported image")

    render_outputs = [session_state, preview, bar, selection, table, swap_btn, status]

    extract_btn.click(fn=load_image, inputs=[in_img, color_count, session_state], outputs=render_outputs)
    selection.input(fn=change_selection, inputs=[selection, session_state], outputs=render_outputs)
    swap_btn.click(fn=run_swap, inputs=[threshold, session_state], outputs=render_outputs + [report])
    export_btn.click(fn=export_png, inputs=[session_state], outputs=[exported, status])

if __name__ == "__main__":
    demo.launch(server_name="0.0.0.0", server_port=7860)
