import numpy as np
import pytest

from palette_swap.errors import InvalidArgument
from palette_swap.preprocessing.sampling import sample

def test_default_stride_takes_every_fourth_pixel():
    img = np.zeros((1, 8, 4), dtype=np.uint8)
    img[0, :, 0] = np.arange(8)
    img[..., 3] = 255
    out = sample(img)
    assert out.shape == (2, 3)
    assert out[:, 0].tolist() == [0, 4]

def test_alpha_must_be_strictly_above_threshold():
    img = np.zeros((1, 4, 4), dtype=np.uint8)
    img[0, :, 0] = [10, 20, 30, 40]
    img[0, :, 3] = [255, 128, 129, 0]
    out = sample(img, stride_bytes=4)
    assert out[:, 0].tolist() == [10, 30]

def test_rgb_input_is_opaque():
    img = np.full((4, 4, 3), 7, dtype=np.uint8)
    assert len(sample(img)) == 4

def test_bad_stride():
    img = np.zeros((2, 2, 4), dtype=np.uint8)
    with pytest.raises(InvalidArgument):
        sample(img, stride_bytes=6)
    with pytest.raises(InvalidArgument):
        sample(img, stride_bytes=0)
