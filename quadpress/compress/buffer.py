# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""
Bounded access to a shared pixel buffer.

The buffer is an (H, W, C) uint8 array with C = 3 (RGB) or 4 (RGBA,
non-premultiplied). Work is handed out as RegionView objects: each view
wraps a numpy slice of its own rectangle, and splitting a view yields four
views over disjoint slices. Concurrent writers therefore never share pixels.

Only the R, G, B channels are read or written. Alpha is left untouched.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from quadpress.schema import Region


COLOR_CHANNELS = 3


class PixelBuffer:
    """Owner of the full pixel grid. Hands out RegionViews."""

    def __init__(self, pixels: NDArray[np.uint8]) -> None:
        if not isinstance(pixels, np.ndarray):
            raise TypeError(f"Expected numpy array, got {type(pixels)}")
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError(
                f"Expected (H, W, 3) or (H, W, 4) array, got shape {pixels.shape}"
            )
        if pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {pixels.dtype}")
        if not pixels.flags.writeable:
            raise ValueError("Pixel array is read-only")

        self.pixels = pixels

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def channels(self) -> int:
        return self.pixels.shape[2]

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4

    @property
    def bounds(self) -> Region:
        return Region.from_size(self.width, self.height)

    def view(self, region: Region) -> RegionView:
        """Return a view over region. Regions outside the buffer are rejected."""
        if not self.bounds.contains(region):
            raise ValueError(
                f"Region {region} lies outside buffer bounds {self.bounds}"
            )
        return RegionView(
            region,
            self.pixels[region.min_y:region.max_y, region.min_x:region.max_x],
        )


class RegionView:
    """
    Exclusive handle on one rectangle of a PixelBuffer.

    The wrapped array is a numpy view, so fills land directly in the
    parent buffer.
    """

    __slots__ = ("region", "_pixels")

    def __init__(self, region: Region, pixels: NDArray[np.uint8]) -> None:
        if pixels.shape[:2] != (region.height, region.width):
            raise ValueError(
                f"View shape {pixels.shape[:2]} does not match region "
                f"{region.width}x{region.height}"
            )
        self.region = region
        self._pixels = pixels

    @property
    def pixel_count(self) -> int:
        return self.region.area

    def rgb(self) -> NDArray[np.uint8]:
        """R, G, B channels as an (h, w, 3) view, rows in order."""
        return self._pixels[..., :COLOR_CHANNELS]

    def iter_rgb(self):
        """Yield (r, g, b) tuples in row-major order."""
        for row in self.rgb():
            for r, g, b in row:
                yield int(r), int(g), int(b)

    def fill(self, color: tuple[int, int, int]) -> None:
        """Paint every pixel's R, G, B with color. Alpha is not touched."""
        self._pixels[..., :COLOR_CHANNELS] = color

    def quadrants(self) -> tuple[RegionView, RegionView, RegionView, RegionView]:
        """Four child views over the floored-midpoint split of this region."""
        children = []
        for child in self.region.quadrants():
            x0 = child.min_x - self.region.min_x
            y0 = child.min_y - self.region.min_y
            children.append(RegionView(
                child,
                self._pixels[y0:y0 + child.height, x0:x0 + child.width],
            ))
        return tuple(children)

    def __repr__(self) -> str:
        r = self.region
        return f"RegionView(({r.min_x},{r.min_y})-({r.max_x},{r.max_y}))"
