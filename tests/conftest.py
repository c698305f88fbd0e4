import numpy as np
import pytest

RED = (255, 0, 0)
BLUE = (0, 0, 255)

def rgba(pixels, h, w):
    arr = np.array(pixels, dtype=np.uint8).reshape(h, w, 3)
    alpha = np.full((h, w, 1), 255, dtype=np.uint8)
    return np.concatenate([arr, alpha], axis=2)

@pytest.fixture
def two_by_two():
    """[red, red, blue, blue] as a 2x2 RGBA buffer."""
    return rgba([RED, RED, BLUE, BLUE], 2, 2)

@pytest.fixture
def half_red_half_blue():
    """20x20, left half red, right half blue."""
    img = np.zeros((20, 20, 4), dtype=np.uint8)
    img[..., 3] = 255
    img[:, :10, :3] = RED
    img[:, 10:, :3] = BLUE
    return img

@pytest.fixture
def balanced_red_blue():
    """16x16, left half red, right half blue. Both default samplers see a 50/50 split."""
    img = np.zeros((16, 16, 4), dtype=np.uint8)
    img[..., 3] = 255
    img[:, :8, :3] = RED
    img[:, 8:, :3] = BLUE
    return img
