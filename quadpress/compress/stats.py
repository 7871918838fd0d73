# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""
Per-region color statistics.

Both functions are read-only, so they are safe to call concurrently on
disjoint views. All divisions floor, matching integer pixel arithmetic.
"""

from __future__ import annotations

import numpy as np

from quadpress.compress.buffer import COLOR_CHANNELS, RegionView

# Rows scored per step in mean_absolute_error
ROW_BAND = 64


def average_color(view: RegionView) -> tuple[int, int, int]:
    """
    Mean R, G, B of a region, each floored to an integer in [0, 255].

    Channels are summed in uint64 so large images cannot overflow.

    Raises:
        ValueError: If the region has no pixels
    """
    n = view.pixel_count
    if n == 0:
        raise ValueError(f"Cannot average empty region {view.region}")

    sums = view.rgb().sum(axis=(0, 1), dtype=np.uint64)
    r, g, b = (int(s) // n for s in sums)
    return r, g, b


def mean_absolute_error(view: RegionView, average: tuple[int, int, int]) -> int:
    """
    Non-uniformity score of a region.

    Sum of |channel - average channel| over every pixel and the three color
    channels, divided by (n * 3) and floored.

    Raises:
        ValueError: If the region has no pixels
    """
    n = view.pixel_count
    if n == 0:
        raise ValueError(f"Cannot score empty region {view.region}")

    # Deviations fit in int16; work in row bands so temporaries stay small
    rgb = view.rgb()
    target = np.asarray(average, dtype=np.int16)
    total = 0
    for start in range(0, rgb.shape[0], ROW_BAND):
        band = rgb[start:start + ROW_BAND].astype(np.int16)
        band -= target
        np.abs(band, out=band)
        total += int(band.sum(dtype=np.int64))
    return total // (n * COLOR_CHANNELS)
