# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""
Quadtree decomposition engine.

Each region is evaluated once: if its mean absolute error exceeds the
threshold and both sides are at least 2 pixels, it is split into four
quadrants that are scheduled as independent tasks. Otherwise it is painted
with its average color. Leaves tile the image exactly once, and siblings
write through disjoint views, so the buffer needs no locking.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from quadpress.schema import CompressionConfig, CompressionResult, Region
from quadpress.compress.buffer import PixelBuffer, RegionView
from quadpress.compress.coordinator import TaskCoordinator
from quadpress.compress.stats import average_color, mean_absolute_error

logger = logging.getLogger(__name__)


def should_split(view: RegionView, error: int, threshold: int) -> bool:
    """Split only when the region is non-uniform and splittable on both axes."""
    return error > threshold and view.region.can_split


class QuadtreeCompressor:
    """
    Runs one compression pass over a PixelBuffer.

    Args:
        buffer: Buffer to mutate in place
        config: Threshold and worker settings (defaults if None)

    Usage::

        buf = PixelBuffer(pixels)
        result = QuadtreeCompressor(buf, CompressionConfig(threshold=10)).run()
    """

    def __init__(
        self,
        buffer: PixelBuffer,
        config: Optional[CompressionConfig] = None,
    ) -> None:
        self.buffer = buffer
        self.config = config or CompressionConfig()
        self._lock = threading.Lock()
        self._leaves: list[Region] = []
        self._visited = 0
        self._max_depth = 0

    def run(self, region: Optional[Region] = None) -> CompressionResult:
        """
        Compress region (the whole buffer by default) and wait for all tasks.

        Raises:
            ValueError: If region is empty or outside the buffer
        """
        region = region if region is not None else self.buffer.bounds
        if region.is_empty:
            raise ValueError(f"Cannot compress empty region {region}")
        root = self.buffer.view(region)

        with self._lock:
            self._leaves.clear()
            self._visited = 0
            self._max_depth = 0

        start = time.perf_counter()
        with TaskCoordinator(self.config.workers) as tasks:
            tasks.submit(self._process, tasks, root, 0)
            tasks.join()
        elapsed = time.perf_counter() - start

        with self._lock:
            leaves = tuple(sorted(self._leaves, key=lambda r: (r.min_y, r.min_x)))
            visited = self._visited
            max_depth = self._max_depth

        logger.debug(
            "Compressed %dx%d at threshold %d: %d leaves, %d regions, depth %d, %.4fs",
            region.width, region.height, self.config.threshold,
            len(leaves), visited, max_depth, elapsed,
        )

        return CompressionResult(
            width=region.width,
            height=region.height,
            threshold=self.config.threshold,
            leaves=leaves,
            regions_visited=visited,
            max_depth=max_depth,
            elapsed_seconds=elapsed,
        )

    def _process(self, tasks: TaskCoordinator, view: RegionView, depth: int) -> None:
        avg = average_color(view)
        error = mean_absolute_error(view, avg)

        if should_split(view, error, self.config.threshold):
            # Children are submitted before this task returns
            for child in view.quadrants():
                tasks.submit(self._process, tasks, child, depth + 1)
            self._record(depth, leaf=None)
        else:
            view.fill(avg)
            self._record(depth, leaf=view.region)

    def _record(self, depth: int, leaf: Optional[Region]) -> None:
        with self._lock:
            self._visited += 1
            if depth > self._max_depth:
                self._max_depth = depth
            if leaf is not None:
                self._leaves.append(leaf)


def compress_buffer(
    buffer: PixelBuffer,
    config: Optional[CompressionConfig] = None,
) -> CompressionResult:
    """Compress an entire PixelBuffer in place."""
    return QuadtreeCompressor(buffer, config).run()
