"""
Source image loading (PNG only).

Decodes a PNG into an (H, W, 4) uint8 RGBA array. Every failure (missing
file, unreadable file, undecodable content) surfaces as a LoadError.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from tex_core.types import Image, as_rgba

from .errors import LOAD_MALFORMED, LOAD_NOT_FOUND, LOAD_PERMISSION, LoadError

logger = logging.getLogger(__name__)


def _open_png(path: Path) -> PILImage.Image:
    try:
        img = PILImage.open(path, formats=["PNG"])
        img.load()
    except FileNotFoundError as e:
        raise LoadError(path, LOAD_NOT_FOUND, f"The source image file {path} does not exist.") from e
    except PermissionError as e:
        raise LoadError(path, LOAD_PERMISSION, f"The source image file {path} is not readable.") from e
    except IsADirectoryError as e:
        raise LoadError(path, LOAD_MALFORMED, f"The source image path {path} is a directory.") from e
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        # Pillow reports truncated/corrupt PNG chunks as OSError or SyntaxError
        raise LoadError(path, LOAD_MALFORMED, f"An error occurred while loading the source image {path}. Error: {e}") from e
    return img


def load_source_image(path: Union[str, Path]) -> Image:
    """
    Load a PNG from disk as an RGBA array.

    Args:
        path: Path to the PNG file

    Returns:
        (H, W, 4) uint8 array, non-premultiplied RGBA

    Raises:
        LoadError: kind "not_found", "permission" or "malformed"
    """
    path = Path(path)
    img = _open_png(path)
    try:
        rgba = np.asarray(img.convert("RGBA"), dtype=np.uint8)
    finally:
        img.close()

    logger.debug("Loaded %s: %dx%d", path, rgba.shape[1], rgba.shape[0])
    return as_rgba(rgba)


def describe_image(path: Union[str, Path]) -> str:
    """
    Bounds of a PNG as "(0,0)-(W,H)".

    Raises:
        LoadError: If the file cannot be opened or decoded
    """
    path = Path(path)
    img = _open_png(path)
    try:
        width, height = img.size
    finally:
        img.close()
    return f"(0,0)-({width},{height})"
