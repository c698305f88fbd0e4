import numpy as np
from palette_swap.io_utils import encode_png, ensure_rgba, load_image_rgba, save_image_rgba

def test_ensure_rgba():
    rgb = np.zeros((3, 4, 3), dtype=np.uint8)
    out = ensure_rgba(rgb)
    assert out.shape == (3, 4, 4)
    assert (out[..., 3] == 255).all()
    gray = np.zeros((3, 4), dtype=np.uint8)
    assert ensure_rgba(gray).shape == (3, 4, 4)

def test_save_and_load(tmp_path):
    img = (np.random.rand(9, 7, 4) * 255).astype("uint8")
    path = save_image_rgba(tmp_path / "x.jpg", img)
    assert path.suffix == ".png"
    assert np.array_equal(load_image_rgba(path), img)
    assert encode_png(img)[:8] == b"\x89PNG\r\n\x1a\n"
