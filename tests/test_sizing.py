import numpy as np
import pytest

from specpress.core.sizing import (
    next_power_of_two,
    previous_power_of_two,
    round_down,
    round_up,
    round_up_2d,
    truncate,
    truncate_2d,
)
from specpress.types import ImageSize


@pytest.mark.parametrize(
    "n, up, down",
    [(1, 1, 1), (2, 2, 2), (3, 4, 2), (5, 8, 4), (8, 8, 8), (1000, 1024, 512)],
)
def test_power_of_two_bounds(n, up, down):
    assert next_power_of_two(n) == up
    assert previous_power_of_two(n) == down


def test_round_up_pads_with_trailing_zeros():
    padded, original = round_up([1, 2, 3, 4, 5])
    assert original == 5
    np.testing.assert_array_equal(padded, [1, 2, 3, 4, 5, 0, 0, 0])


@pytest.mark.parametrize("n", [1, 2, 3, 7, 8, 9, 100])
def test_truncate_undoes_round_up(n):
    data = np.arange(1, n + 1, dtype=np.int16)
    padded, original = round_up(data)
    restored = truncate(padded, original)
    assert restored.dtype == data.dtype
    np.testing.assert_array_equal(restored, data)


def test_round_down():
    np.testing.assert_array_equal(round_down([1, 2, 3, 4, 5, 6]), [1, 2, 3, 4])


def test_rejects_empty_and_oversized():
    with pytest.raises(ValueError):
        round_up([])
    with pytest.raises(ValueError):
        truncate([1, 2], 3)


def test_round_up_2d_pads_symmetrically():
    grid = np.ones((3, 5), dtype=np.uint8)
    padded, original = round_up_2d(grid)
    assert original == ImageSize(width=5, height=3)
    assert padded.shape == (4, 8)
    # one extra row goes after the data, three extra columns split 1/2
    np.testing.assert_array_equal(padded[:3, 1:6], grid)
    assert padded.sum() == grid.sum()
    assert padded[:, 0].sum() == 0
    assert padded[3].sum() == 0


@pytest.mark.parametrize("shape", [(1, 1), (3, 5), (6, 6), (4, 4), (5, 9, 3)])
def test_truncate_2d_undoes_round_up_2d(shape):
    rng = np.random.default_rng(0)
    grid = rng.integers(0, 256, size=shape, dtype=np.uint8)
    padded, original = round_up_2d(grid)
    assert padded.shape[2:] == grid.shape[2:]
    np.testing.assert_array_equal(truncate_2d(padded, original), grid)


def test_truncate_2d_rejects_growth():
    with pytest.raises(ValueError):
        truncate_2d(np.zeros((2, 2)), ImageSize(width=4, height=2))
