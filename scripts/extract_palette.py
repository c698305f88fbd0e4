import argparse
import json
from pathlib import Path
import numpy as np
from palette_swap.config import (
    EXAMPLES_DIR, OUTPUTS_DIR, DEFAULT_PALETTE_SIZE, SWAP_THRESHOLD
)
from palette_swap.errors import PaletteError
from palette_swap.io_utils import list_images, load_image_rgba, save_image_rgba
from palette_swap.metrics.similarity import changed_pixels
from palette_swap.palette.render import draw_palette_bar, rgb_to_hex, segment_label
from palette_swap.session import PaletteSession

def main():
    parser = argparse.ArgumentParser(description="Extract palettes from a folder of images, optionally swapping two colours.")
    parser.add_argument("--examples", type=str, default=str(EXAMPLES_DIR), help="Folder with input images")
    parser.add_argument("--out", type=str, default=str(OUTPUTS_DIR / "palettes"), help="Output folder")
    parser.add_argument("--colors", type=int, default=DEFAULT_PALETTE_SIZE, help="Palette size")
    parser.add_argument("--swap", type=int, nargs=2, default=None, metavar=("A", "B"),
                        help="Swap palette entries A and B and write the recoloured image")
    parser.add_argument("--threshold", type=float, default=SWAP_THRESHOLD)
    parser.add_argument("--seed", type=int, default=None, help="Seed for the palette backfill")
    args = parser.parse_args()

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(args.seed)

    for img_path in list_images(args.examples):
        stem = img_path.stem
        session = PaletteSession()
        try:
            session.load(load_image_rgba(img_path), color_count=args.colors, rng=rng)
        except (PaletteError, FileNotFoundError) as e:
            # continue on individual failures
            print(f"✗ {img_path.name}: {e}")
            continue

        swatches = ", ".join(f"{rgb_to_hex(e.color)} {segment_label(e)}" for e in session.palette)
        print(f"✓ {img_path.name} -> {swatches}")
        save_image_rgba(out_dir / f"{stem}_palette.png", draw_palette_bar(session.palette))

        if args.swap:
            before = session.export()
            try:
                session.swap(args.swap[0], args.swap[1], threshold=args.threshold)
            except PaletteError as e:
                print(f"  ↳ swap skipped: {e}")
            else:
                save_image_rgba(out_dir / f"{stem}_swap_{args.swap[0]}_{args.swap[1]}.png", session.export())
                print(f"  ↳ swapped, {changed_pixels(before, session.buffer)} px changed")

        summary = [{"hex": rgb_to_hex(e.color), "rgb": list(e.color), "percentage": e.percentage}
                   for e in session.palette]
        (out_dir / f"{stem}_palette.json").write_text(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
