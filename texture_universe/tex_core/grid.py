"""
Tile grid extraction.

Partitions a source image into a row-major grid of square tiles:
- num_cols = floor(width / tile_size), num_rows = floor(height / tile_size)
- cell (x, y) covers [x*ts, (x+1)*ts) × [y*ts, (y+1)*ts)
- trailing partial columns/rows are dropped, never padded
- an image smaller than one tile in either dimension yields an empty grid
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

from .types import Cell, Image, Tile


@dataclass(frozen=True)
class GridShape:
    """Grid dimensions, fixed once extraction begins."""
    num_cols: int   # Stride of the cell record arrays
    num_rows: int
    tile_size: int

    @property
    def num_cells(self) -> int:
        return self.num_cols * self.num_rows


def grid_shape(width: int, height: int, tile_size: int) -> GridShape:
    """
    Compute grid dimensions for an image.

    Examples:
        >>> grid_shape(300, 200, 128)
        GridShape(num_cols=2, num_rows=1, tile_size=128)
        >>> grid_shape(100, 500, 128).num_cells
        0

    Raises:
        ValueError: If tile_size is not positive
    """
    if tile_size <= 0:
        raise ValueError(f"tile_size must be positive, got {tile_size}")
    return GridShape(num_cols=width // tile_size, num_rows=height // tile_size, tile_size=tile_size)


def image_size(image: Image) -> Tuple[int, int]:
    """(width, height) of an (H, W, C) array."""
    return int(image.shape[1]), int(image.shape[0])


def crop_tile(image: Image, cell: Cell, tile_size: int) -> Tile:
    """Copy of the tile_size × tile_size region of one cell."""
    top = cell.y * tile_size
    left = cell.x * tile_size
    return image[top:top + tile_size, left:left + tile_size].copy()


def partition(image: Image, tile_size: int) -> Iterator[Tuple[int, int, Tile]]:
    """
    Yield (x, y, tile) for every full cell, y outer, x inner.

    Args:
        image: (H, W, 4) source image (read only)
        tile_size: Edge length of each tile

    Yields:
        (x, y, tile) where tile is an independent copy of the cell's pixels
    """
    width, height = image_size(image)
    shape = grid_shape(width, height, tile_size)

    for y in range(shape.num_rows):
        for x in range(shape.num_cols):
            yield x, y, crop_tile(image, Cell(y=y, x=x), tile_size)
