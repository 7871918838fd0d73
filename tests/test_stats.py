# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""Tests for region statistics (average color, mean absolute error)."""

import tracemalloc

import numpy as np
import pytest

from quadpress.compress.buffer import PixelBuffer
from quadpress.compress.stats import average_color, mean_absolute_error
from quadpress.schema import Region


def _full_view(pixels):
    buf = PixelBuffer(pixels)
    return buf.view(buf.bounds)


class TestAverageColor:

    def test_constant_region_exact(self):
        pixels = np.full((5, 7, 4), [10, 20, 30, 255], dtype=np.uint8)
        assert average_color(_full_view(pixels)) == (10, 20, 30)

    def test_floor_truncation(self):
        pixels = np.zeros((1, 2, 4), dtype=np.uint8)
        pixels[0, 1, 0] = 1
        assert average_color(_full_view(pixels)) == (0, 0, 0)

    def test_floor_not_round(self):
        pixels = np.zeros((1, 4, 3), dtype=np.uint8)
        pixels[0, :3, 2] = 1  # blue mean 0.75
        assert average_color(_full_view(pixels))[2] == 0

    def test_mixed_values(self):
        pixels = np.zeros((2, 2, 3), dtype=np.uint8)
        pixels[..., 0] = [[0, 100], [200, 255]]
        assert average_color(_full_view(pixels))[0] == 138  # 555 // 4

    def test_alpha_ignored(self):
        pixels = np.full((2, 2, 4), 50, dtype=np.uint8)
        pixels[..., 3] = [[0, 255], [7, 9]]
        assert average_color(_full_view(pixels)) == (50, 50, 50)

    def test_large_region_no_overflow(self):
        pixels = np.full((2000, 2000, 3), 255, dtype=np.uint8)
        assert average_color(_full_view(pixels)) == (255, 255, 255)

    def test_sub_region(self):
        pixels = np.zeros((4, 4, 3), dtype=np.uint8)
        pixels[2:, 2:] = [90, 60, 30]
        view = PixelBuffer(pixels).view(Region(2, 2, 4, 4))
        assert average_color(view) == (90, 60, 30)

    def test_empty_region_raises(self):
        view = PixelBuffer(np.zeros((4, 4, 4), dtype=np.uint8)).view(Region(1, 1, 1, 3))
        with pytest.raises(ValueError, match="empty"):
            average_color(view)


class TestMeanAbsoluteError:

    def test_uniform_region_is_zero(self):
        pixels = np.full((6, 6, 4), [12, 200, 33, 128], dtype=np.uint8)
        view = _full_view(pixels)
        assert mean_absolute_error(view, average_color(view)) == 0

    def test_single_pixel_is_zero(self):
        pixels = np.array([[[255, 3, 99, 0]]], dtype=np.uint8)
        view = _full_view(pixels)
        assert mean_absolute_error(view, average_color(view)) == 0

    def test_two_tone(self):
        pixels = np.zeros((1, 2, 3), dtype=np.uint8)
        pixels[0, 1] = [255, 255, 255]
        view = _full_view(pixels)
        avg = average_color(view)
        assert avg == (127, 127, 127)
        # (127 * 3 + 128 * 3) // 6
        assert mean_absolute_error(view, avg) == 127

    def test_floor_truncation(self):
        pixels = np.zeros((1, 2, 4), dtype=np.uint8)
        pixels[0, 1, 0] = 1
        view = _full_view(pixels)
        # deviation sum 1 over 6 channel samples
        assert mean_absolute_error(view, average_color(view)) == 0

    def test_white_corner(self):
        pixels = np.zeros((4, 4, 4), dtype=np.uint8)
        pixels[0, 0, :3] = 255
        view = _full_view(pixels)
        avg = average_color(view)
        assert avg == (15, 15, 15)
        # (240 * 3 + 15 * 15 * 3) // 48
        assert mean_absolute_error(view, avg) == 29

    def test_against_given_average(self):
        pixels = np.full((2, 2, 3), 100, dtype=np.uint8)
        assert mean_absolute_error(_full_view(pixels), (90, 100, 110)) == 6

    def test_empty_region_raises(self):
        view = PixelBuffer(np.zeros((4, 4, 4), dtype=np.uint8)).view(Region(0, 2, 4, 2))
        with pytest.raises(ValueError, match="empty"):
            mean_absolute_error(view, (0, 0, 0))


class TestMemory:

    def _peak(self, fn, *args):
        tracemalloc.start()
        try:
            fn(*args)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        return peak

    def test_error_scoring_stays_below_buffer_size(self):
        pixels = np.random.default_rng(1).integers(0, 256, size=(2000, 2000, 4), dtype=np.uint8)
        view = _full_view(pixels)
        avg = average_color(view)
        assert self._peak(mean_absolute_error, view, avg) < pixels.nbytes // 4

    def test_averaging_stays_below_buffer_size(self):
        pixels = np.full((2000, 2000, 4), 200, dtype=np.uint8)
        view = PixelBuffer(pixels).view(Region(1, 1, 1999, 1999))
        assert self._peak(average_color, view) < pixels.nbytes // 2

    def test_banded_scoring_matches_whole_region(self):
        pixels = np.random.default_rng(2).integers(0, 256, size=(300, 7, 3), dtype=np.uint8)
        view = _full_view(pixels)
        avg = average_color(view)
        expected = int(np.abs(pixels.astype(np.int64) - np.array(avg)).sum()) // (300 * 7 * 3)
        assert mean_absolute_error(view, avg) == expected
