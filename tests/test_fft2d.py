import numpy as np
import pytest

from specpress.core import (
    fft_2d,
    fft_2d_horizontal,
    fft_2d_horizontal_inverse,
    fft_2d_inverse,
    fft_2d_vertical,
    fft_2d_vertical_inverse,
    shift_quadrants,
)


@pytest.fixture
def grid():
    rng = np.random.default_rng(42)
    return rng.uniform(0, 255, size=(8, 16))


def test_matches_numpy(grid):
    np.testing.assert_allclose(fft_2d(grid), np.fft.fft2(grid), rtol=1e-4, atol=0.1)


def test_round_trip(grid):
    np.testing.assert_allclose(fft_2d_inverse(fft_2d(grid)).real, grid, atol=1e-3)


def test_directional_transforms(grid):
    np.testing.assert_allclose(fft_2d_horizontal(grid), np.fft.fft(grid, axis=1), rtol=1e-4, atol=0.1)
    np.testing.assert_allclose(fft_2d_vertical(grid), np.fft.fft(grid, axis=0), rtol=1e-4, atol=0.1)
    np.testing.assert_allclose(fft_2d_horizontal_inverse(fft_2d_horizontal(grid)).real, grid, atol=1e-3)
    np.testing.assert_allclose(fft_2d_vertical_inverse(fft_2d_vertical(grid)).real, grid, atol=1e-3)


def test_zero_frequency_in_corner():
    spectrum = fft_2d(np.full((4, 4), 10.0))
    assert spectrum[0, 0] == pytest.approx(160.0)
    assert np.allclose(spectrum.ravel()[1:], 0, atol=1e-4)


def test_shift_quadrants_centres_dc():
    spectrum = np.zeros((4, 8))
    spectrum[0, 0] = 1.0
    shifted = shift_quadrants(spectrum)
    assert shifted[2, 4] == 1.0
    np.testing.assert_array_equal(shift_quadrants(shifted), spectrum)
    np.testing.assert_array_equal(shifted, np.fft.fftshift(spectrum))


def test_shift_quadrants_keeps_channels():
    pixels = np.arange(4 * 4 * 3).reshape(4, 4, 3)
    shifted = shift_quadrants(pixels)
    np.testing.assert_array_equal(shifted[2, 2], pixels[0, 0])
