from io import BytesIO
from pathlib import Path
from typing import Union
import numpy as np
from PIL import Image

from palette_swap.errors import InvalidArgument

# Everything in the engine works on (H, W, 4) uint8 RGBA; Pillow handles
# palette/greyscale/alpha modes on the way in.
def load_image_rgba(path: Union[str, Path]) -> np.ndarray:
    path = Path(path)
    try:
        with Image.open(path) as pil:
            return np.array(pil.convert("RGBA"), dtype=np.uint8)
    except (FileNotFoundError, OSError) as e:
        raise FileNotFoundError(f"Could not read image: {path}") from e

def ensure_rgba(img: np.ndarray) -> np.ndarray:
    """(H,W), (H,W,3) or (H,W,4) uint8 -> (H,W,4) uint8. Missing alpha is opaque."""
    if img.ndim == 2:
        img = np.repeat(img[..., None], 3, axis=2)
    if img.ndim != 3 or img.shape[2] not in (3, 4):
        raise InvalidArgument(f"expected an RGB or RGBA image, got shape {img.shape}")
    img = img.astype(np.uint8, copy=False)
    if img.shape[2] == 4:
        return img
    alpha = np.full(img.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([img, alpha], axis=2)

def encode_png(img_rgba: np.ndarray) -> bytes:
    buf = BytesIO()
    Image.fromarray(ensure_rgba(img_rgba)).save(buf, format="PNG")
    return buf.getvalue()

def save_image_rgba(path: Union[str, Path], img_rgba: np.ndarray) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() != ".png":
        # alpha only survives in PNG
        path = path.with_suffix(".png")
    path.write_bytes(encode_png(img_rgba))
    return path

def list_images(folder: Union[str, Path]) -> list[Path]:
    folder = Path(folder)
    exts = (".jpg", ".jpeg", ".png", ".bmp", ".webp", ".gif")
    return sorted([p for p in folder.iterdir() if p.suffix.lower() in exts])
