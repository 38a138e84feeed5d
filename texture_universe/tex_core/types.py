"""
Core type definitions for the texture tile deduplicator.

Images are numpy arrays of shape (H, W, 4), dtype uint8, holding
non-premultiplied RGBA. Row index is y, column index is x.
"""

from dataclasses import dataclass
from typing import NewType

import numpy as np

# Pixel surfaces: source images and tiles share one representation
Image = np.ndarray  # Image[y, x] = (R, G, B, A)
Tile = np.ndarray   # tile_size × tile_size × 4

# 64-bit FNV-1a content hash (0 to 2^64-1)
Fingerprint = NewType("Fingerprint", int)

# 3-bit code 00000mrr: m = mirrored, rr = quarter turns
OrientationCode = NewType("OrientationCode", int)


@dataclass(frozen=True, order=True)
class Cell:
    """Grid cell coordinates, ordered row-major (y first, then x)."""
    y: int
    x: int

    def index(self, stride: int) -> int:
        """Position of this cell in the flat cell record arrays."""
        return self.y * stride + self.x


def as_rgba(image: np.ndarray) -> Image:
    """
    Validate and normalize an array into an (H, W, 4) uint8 RGBA image.

    Accepts (H, W) grayscale, (H, W, 3) RGB and (H, W, 4) RGBA arrays.
    Grayscale and RGB inputs are treated as fully opaque.

    Raises:
        ValueError: If the array shape or dtype cannot be interpreted
    """
    arr = np.asarray(image)
    if arr.dtype != np.uint8:
        raise ValueError(f"Image must be uint8, got {arr.dtype}")

    if arr.ndim == 2:
        arr = np.stack([arr, arr, arr], axis=-1)

    if arr.ndim != 3:
        raise ValueError(f"Image must be 2D or 3D, got {arr.ndim}D")

    channels = arr.shape[2]
    if channels == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr, alpha], axis=-1)
    elif channels != 4:
        raise ValueError(f"Image must have 3 or 4 channels, got {channels}")

    return arr
