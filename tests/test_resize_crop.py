import numpy as np
from palette_swap.preprocessing.resize_crop import compute_extraction_size, downscale_for_extraction

def test_longer_edge_capped():
    assert compute_extraction_size(400, 800) == (100, 200)
    assert compute_extraction_size(1000, 300) == (200, 60)

def test_fraction_truncated():
    # 300/301*200 = 199.33
    assert compute_extraction_size(300, 301) == (199, 200)

def test_small_images_untouched():
    img = (np.random.rand(50, 120, 4) * 255).astype("uint8")
    assert compute_extraction_size(50, 120) == (50, 120)
    assert downscale_for_extraction(img) is img

def test_downscale_keeps_alpha():
    img = (np.random.rand(301, 517, 4) * 255).astype("uint8")
    out = downscale_for_extraction(img)
    h, w = out.shape[:2]
    assert max(h, w) == 200
    assert out.shape[2] == 4
