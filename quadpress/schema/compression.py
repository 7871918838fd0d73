# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""
Compression schema -- regions, configuration and run results.

Design principles:
- Immutable: All types are frozen dataclasses
- Explicit: The threshold travels with every call, never as global state
- Serializable: Results are JSON-ready for reporting

Region coordinates follow the half-open convention: a region covers
columns min_x..max_x-1 and rows min_y..max_y-1.
"""

from __future__ import annotations

import json
import numbers
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Regions
# =============================================================================


@dataclass(frozen=True, slots=True)
class Region:
    """
    An axis-aligned rectangle of the image.

    Attributes:
        min_x: Left edge (inclusive)
        min_y: Top edge (inclusive)
        max_x: Right edge (exclusive)
        max_y: Bottom edge (exclusive)
    """
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    def __post_init__(self) -> None:
        if self.max_x < self.min_x or self.max_y < self.min_y:
            raise ValueError(
                f"Malformed region ({self.min_x}, {self.min_y})-"
                f"({self.max_x}, {self.max_y})"
            )

    @classmethod
    def from_size(cls, width: int, height: int) -> Region:
        """Region covering a whole width x height image."""
        return cls(0, 0, width, height)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.area == 0

    @property
    def can_split(self) -> bool:
        """True if both sides are at least 2 pixels long."""
        return self.width >= 2 and self.height >= 2

    def contains(self, other: Region) -> bool:
        """True if other lies entirely inside this region."""
        return (
            self.min_x <= other.min_x
            and self.min_y <= other.min_y
            and other.max_x <= self.max_x
            and other.max_y <= self.max_y
        )

    def quadrants(self) -> tuple[Region, Region, Region, Region]:
        """
        Split into four children at the floored midpoint.

        Returns (top-left, top-right, bottom-left, bottom-right). With an odd
        width or height the right/bottom children are one pixel larger.
        """
        half_w = self.width // 2
        half_h = self.height // 2
        mid_x = self.min_x + half_w
        mid_y = self.min_y + half_h
        return (
            Region(self.min_x, self.min_y, mid_x, mid_y),
            Region(mid_x, self.min_y, self.max_x, mid_y),
            Region(self.min_x, mid_y, mid_x, self.max_y),
            Region(mid_x, mid_y, self.max_x, self.max_y),
        )

    def to_dict(self) -> dict:
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Region:
        return cls(
            min_x=d["min_x"],
            min_y=d["min_y"],
            max_x=d["max_x"],
            max_y=d["max_y"],
        )


# =============================================================================
# Configuration
# =============================================================================

DEFAULT_THRESHOLD = 10


def _is_integer(value: object) -> bool:
    """True for Python and NumPy integers, excluding bool."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class CompressionConfig:
    """
    Settings for a compression run.

    Attributes:
        threshold: Maximum mean absolute error a region may have before it
            is split. 0 keeps splitting until regions are uniform.
        workers: Thread pool size. None uses the executor default,
            0 runs every region inline on the calling thread.
    """

    threshold: int = DEFAULT_THRESHOLD
    workers: Optional[int] = None

    def __post_init__(self) -> None:
        if not _is_integer(self.threshold):
            raise ValueError(f"Threshold must be an integer, got {self.threshold!r}")
        if self.threshold < 0:
            raise ValueError(f"Threshold must be >= 0, got {self.threshold}")
        # Store NumPy integers as plain ints
        object.__setattr__(self, "threshold", int(self.threshold))

        if self.workers is not None:
            if not _is_integer(self.workers):
                raise ValueError(f"Workers must be an integer, got {self.workers!r}")
            if self.workers < 0:
                raise ValueError(f"Workers must be >= 0, got {self.workers}")
            object.__setattr__(self, "workers", int(self.workers))


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class CompressionResult:
    """
    Summary of a finished compression run.

    The pixel buffer itself is mutated in place; this records how it was
    partitioned.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        threshold: Threshold the run used
        leaves: Flat-filled regions, ordered row-major by (min_y, min_x)
        regions_visited: Number of regions evaluated (leaves + splits)
        max_depth: Deepest quadtree level reached (root = 0)
        elapsed_seconds: Wall time of the run
    """
    width: int
    height: int
    threshold: int
    leaves: tuple[Region, ...]
    regions_visited: int
    max_depth: int
    elapsed_seconds: float = 0.0

    @property
    def leaf_count(self) -> int:
        return len(self.leaves)

    @property
    def covered_area(self) -> int:
        """Total pixel area of all leaves."""
        return sum(leaf.area for leaf in self.leaves)

    def to_dict(self, include_leaves: bool = False) -> dict:
        d = {
            "width": self.width,
            "height": self.height,
            "threshold": self.threshold,
            "leaf_count": self.leaf_count,
            "regions_visited": self.regions_visited,
            "max_depth": self.max_depth,
            "elapsed_seconds": round(self.elapsed_seconds, 6),
        }
        if include_leaves:
            d["leaves"] = [leaf.to_dict() for leaf in self.leaves]
        return d

    def to_json(self, indent: Optional[int] = None, include_leaves: bool = False) -> str:
        return json.dumps(self.to_dict(include_leaves=include_leaves), indent=indent)
