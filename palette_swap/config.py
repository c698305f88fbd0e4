from pathlib import Path

# Project roots
ROOT = Path(__file__).resolve().parents[1]
EXAMPLES_DIR = ROOT / "app" / "examples"
# Created on first write (io_utils.save_image_rgba), never at import time.
OUTPUTS_DIR = ROOT / "data" / "outputs"

# Extraction defaults
# Longer edge of the working copy used for palette extraction.
MAX_EXTRACT_EDGE = 200
DEFAULT_PALETTE_SIZE = 5

# Byte stride over the RGBA stream (16 bytes == every 4th pixel).
SAMPLE_STRIDE_BYTES = 16
# Pixels with alpha <= this are skipped while sampling.
ALPHA_THRESHOLD = 128

# Backfill draws from every Nth sampled pixel when median cut under-produces.
BACKFILL_STRIDE = 100

# Coverage estimation samples every Nth pixel of the full image.
ESTIMATE_STRIDE = 10
# Rows per chunk for nearest-colour classification (bounds memory).
NEAREST_CHUNK = 65536

# Recolor defaults
SWAP_THRESHOLD = 30
MAX_SELECTION = 2

# Palette bar rendering
BAR_WIDTH = 600
BAR_HEIGHT = 56
BAR_MIN_SEGMENT = 40
