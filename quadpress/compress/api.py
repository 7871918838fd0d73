# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""
Main compression API.

This is the primary entry point for Quadpress's compression core.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from quadpress.schema import DEFAULT_THRESHOLD, CompressionConfig, CompressionResult
from quadpress.compress.buffer import PixelBuffer
from quadpress.compress.engine import compress_buffer


def compress(
    image: NDArray[np.uint8],
    threshold: int = DEFAULT_THRESHOLD,
    *,
    workers: Optional[int] = None,
    config: Optional[CompressionConfig] = None,
) -> CompressionResult:
    """
    Compress an image in place by quadtree flattening.

    Regions whose mean absolute color error exceeds the threshold are split
    into quadrants; every other region is painted with its average color.
    Alpha is never modified.

    Args:
        image: NumPy array of shape (H, W, 3) or (H, W, 4), dtype uint8.
            Mutated in place.
        threshold: Maximum mean absolute error of a flat region (default: 10)
        workers: Thread pool size; 0 runs single-threaded (default: pool default)
        config: Full configuration. Overrides threshold and workers if given.

    Returns:
        CompressionResult describing the leaf regions

    Example:
        >>> pixels = np.zeros((4, 4, 4), dtype=np.uint8)
        >>> compress(pixels, threshold=10).leaf_count
        1
    """
    if not isinstance(image, np.ndarray):
        raise TypeError(f"Expected numpy array, got {type(image)}")

    cfg = config or CompressionConfig(threshold=threshold, workers=workers)
    buffer = PixelBuffer(image)

    if buffer.width == 0 or buffer.height == 0:
        raise ValueError(
            f"Image has no pixels ({buffer.width}x{buffer.height})"
        )

    return compress_buffer(buffer, cfg)


def compress_file(
    path: Union[str, Path],
    threshold: int = DEFAULT_THRESHOLD,
    *,
    workers: Optional[int] = None,
    config: Optional[CompressionConfig] = None,
) -> tuple[NDArray[np.uint8], str, CompressionResult]:
    """
    Decode an image file and compress it.

    Returns:
        (pixels, format, result) where pixels is the compressed RGBA array
        and format is the source format ('png', 'jpg' or 'gif')
    """
    from quadpress.io import load_image

    pixels, fmt = load_image(path)
    result = compress(pixels, threshold, workers=workers, config=config)
    return pixels, fmt, result
