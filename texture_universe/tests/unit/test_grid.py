"""
Unit tests for tex_core/grid.py.

Acceptance criteria:
- num_cols/num_rows use floor division
- Row-major enumeration (y outer, x inner)
- Trailing partial column/row dropped
- Images smaller than one tile give an empty grid
"""

import numpy as np
import pytest

from tex_core.grid import crop_tile, grid_shape, image_size, partition
from tex_core.types import Cell


def numbered_image(width, height):
    """RGBA image whose red channel encodes x and green channel encodes y."""
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[..., 0] = np.arange(width, dtype=np.uint8)[None, :]
    image[..., 1] = np.arange(height, dtype=np.uint8)[:, None]
    image[..., 3] = 255
    return image


class TestGridShape:

    def test_floor_division(self):
        shape = grid_shape(300, 200, 128)
        assert (shape.num_cols, shape.num_rows, shape.num_cells) == (2, 1, 2)

    def test_exact_fit(self):
        assert grid_shape(256, 256, 128).num_cells == 4

    @pytest.mark.parametrize("width, height", [(127, 500), (500, 127), (0, 0), (1, 1)])
    def test_smaller_than_tile_is_empty(self, width, height):
        assert grid_shape(width, height, 128).num_cells == 0

    @pytest.mark.parametrize("tile_size", [0, -4])
    def test_tile_size_must_be_positive(self, tile_size):
        with pytest.raises(ValueError):
            grid_shape(10, 10, tile_size)


class TestPartition:

    def test_row_major_order(self):
        cells = [(x, y) for x, y, _ in partition(numbered_image(12, 8), 4)]
        assert cells == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]

    def test_tile_covers_cell_rectangle(self):
        image = numbered_image(12, 8)
        for x, y, tile in partition(image, 4):
            assert tile.shape == (4, 4, 4)
            assert tile[0, 0, 0] == x * 4 and tile[0, 0, 1] == y * 4
            assert tile[3, 3, 0] == x * 4 + 3 and tile[3, 3, 1] == y * 4 + 3

    def test_trailing_pixels_never_visited(self):
        """A 30x20 image with 8px tiles: 3x2 cells, 6 columns and 4 rows dropped."""
        image = numbered_image(30, 20)
        tiles = list(partition(image, 8))
        assert len(tiles) == 6
        max_x = max(int(tile[..., 0].max()) for _, _, tile in tiles)
        max_y = max(int(tile[..., 1].max()) for _, _, tile in tiles)
        assert (max_x, max_y) == (23, 15)

    def test_empty_when_image_too_small(self):
        assert list(partition(numbered_image(7, 20), 8)) == []

    def test_tiles_are_copies(self):
        image = numbered_image(8, 8)
        (_, _, tile), = partition(image, 8)
        tile[...] = 0
        assert image[..., 3].min() == 255


class TestHelpers:

    def test_image_size_is_width_height(self):
        assert image_size(np.zeros((5, 9, 4), dtype=np.uint8)) == (9, 5)

    def test_crop_tile(self):
        tile = crop_tile(numbered_image(16, 16), Cell(y=1, x=3), 4)
        assert tile[0, 0, 0] == 12 and tile[0, 0, 1] == 4

    def test_cell_index_and_order(self):
        assert Cell(y=2, x=1).index(stride=5) == 11
        assert sorted([Cell(y=1, x=0), Cell(y=0, x=3)]) == [Cell(y=0, x=3), Cell(y=1, x=0)]
