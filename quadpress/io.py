# Copyright (c) 2026 Quadpress
# SPDX-License-Identifier: MIT

"""
Image decoding and encoding.

Decoded images are RGBA uint8 arrays (non-premultiplied), the layout the
compression core works on. Supported formats: PNG, JPEG and GIF.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image

SUPPORTED_FORMATS = ("png", "jpg", "gif")

# Pillow format name -> short name used on the command line
_PIL_TO_FORMAT = {
    "PNG": "png",
    "JPEG": "jpg",
    "GIF": "gif",
}

_FORMAT_TO_PIL = {v: k for k, v in _PIL_TO_FORMAT.items()}

JPEG_QUALITY = 75
GIF_COLORS = 256


def normalize_format(fmt: str) -> str:
    """Map a format name like 'PNG', 'jpeg' or 'jpg' to its short name."""
    key = fmt.strip().lower()
    if key == "jpeg":
        key = "jpg"
    if key not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported image format {fmt!r}: expected one of {', '.join(SUPPORTED_FORMATS)}"
        )
    return key


def load_image(path: Union[str, Path]) -> tuple[NDArray[np.uint8], str]:
    """
    Decode an image file into an RGBA array.

    Returns:
        (pixels, format) where pixels has shape (H, W, 4) and format is
        one of SUPPORTED_FORMATS

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the file is not PNG, JPEG or GIF
    """
    with Image.open(path) as img:
        if img.format not in _PIL_TO_FORMAT:
            raise ValueError(
                f"Unsupported image format {img.format!r} in {path}"
            )
        fmt = _PIL_TO_FORMAT[img.format]
        # "RGBA" in Pillow is straight (non-premultiplied) alpha
        rgba = img.convert("RGBA")
        pixels = np.array(rgba, dtype=np.uint8)

    return pixels, fmt


def save_image(
    pixels: NDArray[np.uint8],
    path: Union[str, Path],
    fmt: str,
) -> None:
    """
    Encode an (H, W, 3) or (H, W, 4) uint8 array to path.

    PNG keeps alpha, JPEG drops it, GIF is quantized to 256 colors.
    """
    fmt = normalize_format(fmt)
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise ValueError(
            f"Expected (H, W, 3) or (H, W, 4) array, got shape {pixels.shape}"
        )

    img = Image.fromarray(np.ascontiguousarray(pixels))

    if fmt == "jpg":
        img.convert("RGB").save(path, format="JPEG", quality=JPEG_QUALITY)
    elif fmt == "gif":
        img.convert("RGB").quantize(colors=GIF_COLORS).save(path, format="GIF")
    else:
        img.save(path, format="PNG")


def output_path(name: Union[str, Path], fmt: str) -> Path:
    """Build '<name>.<fmt>'."""
    return Path(f"{name}.{normalize_format(fmt)}")
