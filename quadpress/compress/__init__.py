# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""
Compression core for Quadpress.

Recursive quadtree flattening of a pixel buffer, with sibling regions
processed concurrently.
"""

from quadpress.compress.api import compress, compress_file
from quadpress.compress.buffer import PixelBuffer, RegionView
from quadpress.compress.coordinator import TaskCoordinator
from quadpress.compress.engine import QuadtreeCompressor
from quadpress.compress.stats import average_color, mean_absolute_error

__all__ = [
    "compress",
    "compress_file",
    "PixelBuffer",
    "RegionView",
    "TaskCoordinator",
    "QuadtreeCompressor",
    "average_color",
    "mean_absolute_error",
]
