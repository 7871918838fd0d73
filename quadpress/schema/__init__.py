# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""
Schema definitions for quadtree compression.

All types in this module are immutable (frozen dataclasses).
"""

from quadpress.schema.compression import (
    DEFAULT_THRESHOLD,
    CompressionConfig,
    CompressionResult,
    Region,
)

__all__ = [
    "DEFAULT_THRESHOLD",
    "Region",
    "CompressionConfig",
    "CompressionResult",
]
