# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""
Quadpress -- Quadtree image compression.

Recursively splits an image into quadrants until each region's colors are
close to their average, then paints every region flat.

Quick start::

    from quadpress import compress

    result = compress(pixels, threshold=10)   # pixels mutated in place
    result.leaf_count
"""

from __future__ import annotations

__version__ = "1.0.0"

from quadpress.compress import compress, compress_file
from quadpress.schema import (
    CompressionConfig,
    CompressionResult,
    Region,
)

__all__ = [
    # Core API
    "compress",
    "compress_file",
    # Types
    "CompressionConfig",
    "CompressionResult",
    "Region",
    # Version
    "__version__",
]
