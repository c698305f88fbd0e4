import numpy as np

from palette_swap.recolor.swap import swap, swap_masks

RED = (255, 0, 0)
BLUE = (0, 0, 255)

def test_red_blue_flip(two_by_two):
    out = swap(two_by_two, RED, BLUE, threshold=10)
    assert out[0, 0, :3].tolist() == list(BLUE)
    assert out[0, 1, :3].tolist() == list(BLUE)
    assert out[1, 0, :3].tolist() == list(RED)
    assert out[1, 1, :3].tolist() == list(RED)

def test_input_untouched_and_alpha_kept(two_by_two):
    img = two_by_two.copy()
    img[0, 0, 3] = 17
    before = img.copy()
    out = swap(img, RED, BLUE)
    assert np.array_equal(img, before)
    assert out[0, 0, 3] == 17

def test_swap_twice_restores_noisy_image():
    rng = np.random.default_rng(5)
    img = np.zeros((12, 12, 4), dtype=np.uint8)
    img[..., 3] = 255
    img[:6, :, :3] = RED
    img[6:, :, :3] = BLUE
    noise = rng.integers(-5, 6, size=(12, 12, 3))
    img[..., :3] = np.clip(img[..., :3].astype(int) + noise, 0, 255).astype(np.uint8)

    once = swap(img, RED, BLUE, threshold=30)
    twice = swap(once, RED, BLUE, threshold=30)
    assert (twice[:6, :, :3] == RED).all()
    assert (twice[6:, :, :3] == BLUE).all()

def test_a_membership_checked_first():
    a, b = (100, 0, 0), (110, 0, 0)
    img = np.array([[[105, 0, 0, 255]]], dtype=np.uint8)
    out = swap(img, a, b, threshold=10)
    assert out[0, 0, :3].tolist() == list(b)

def test_far_pixels_unchanged():
    img = np.array([[[0, 255, 0, 255], [250, 5, 0, 255]]], dtype=np.uint8)
    out = swap(img, RED, BLUE, threshold=30)
    assert out[0, 0, :3].tolist() == [0, 255, 0]
    assert out[0, 1, :3].tolist() == list(BLUE)

def test_threshold_is_inclusive():
    img = np.array([[[3, 4, 0]]], dtype=np.uint8)   # distance 5 from black
    to_b, to_a = swap_masks(img, (0, 0, 0), (255, 255, 255), threshold=5)
    assert to_b[0, 0] and not to_a[0, 0]

def test_chunked_masks_match_single_pass():
    rng = np.random.default_rng(6)
    img = rng.integers(0, 256, size=(23, 17, 4)).astype(np.uint8)
    a, b = (60, 60, 60), (200, 200, 200)
    small_b, small_a = swap_masks(img, a, b, threshold=100, chunk=7)
    full_b, full_a = swap_masks(img, a, b, threshold=100, chunk=img.shape[0] * img.shape[1])
    assert np.array_equal(small_b, full_b)
    assert np.array_equal(small_a, full_a)
    assert small_b.any() and small_a.any()
