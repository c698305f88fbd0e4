import math
import numpy as np
import pytest

from palette_swap.errors import InvalidArgument
from palette_swap.metrics.color_metric import distance, distances_to, nearest, nearest_indices

def test_distance_symmetric_and_zero():
    a, b = (12, 200, 7), (90, 3, 255)
    assert distance(a, b) == distance(b, a)
    assert distance(a, a) == 0
    assert distance((0, 0, 0), (3, 4, 0)) == 5.0

def test_nearest_single_entry_is_zero():
    for p in [(0, 0, 0), (255, 255, 255), (17, 99, 201)]:
        assert nearest(p, [(128, 128, 128)]) == 0

def test_nearest_tie_goes_to_lowest_index():
    # (10,0,0) is equidistant from both
    assert nearest((10, 0, 0), [(0, 0, 0), (20, 0, 0)]) == 0
    assert nearest((19, 0, 0), [(0, 0, 0), (20, 0, 0)]) == 1

def test_nearest_empty_palette_raises():
    with pytest.raises(InvalidArgument):
        nearest((1, 2, 3), [])
    with pytest.raises(InvalidArgument):
        nearest_indices(np.zeros((4, 3), dtype=np.uint8), [])

def test_nearest_indices_matches_scalar_version():
    rng = np.random.default_rng(0)
    pixels = rng.integers(0, 256, size=(500, 4)).astype(np.uint8)
    palette = [(0, 0, 0), (255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 255)]
    got = nearest_indices(pixels, palette, chunk=64)
    want = [nearest(p[:3], palette) for p in pixels]
    assert got.tolist() == want

def test_distances_to():
    pixels = np.array([[0, 0, 0, 255], [3, 4, 0, 0]], dtype=np.uint8)
    d = distances_to(pixels, (0, 0, 0))
    assert d.tolist() == [0.0, 5.0]
    assert math.isclose(distances_to(pixels, (255, 255, 255))[0], math.sqrt(3) * 255)
