"""
ImageSet: unique tile set of a source texture.

A source image is cut into square tiles (row-major) and each tile is
compared against the prototypes found so far. Two tiles are equivalent when
one equals the other under any of the 8 mirror/rotation orientations.

Phases (strictly sequential, single pass):
1. Load: decode the source image (LoadError ends the run, nothing recorded)
2. Extract+Dedup: for each cell, hash the 8 variants in code order 0..7 and
   take the FIRST fingerprint already in the registry. With no match, the
   identity variant becomes a new prototype with orientation 0.

State per run (never shared between instances):
- proto_images: fingerprint -> prototype tile (grows monotonically)
- images[i]: fingerprint the cell at index i resolves to
- orientations[i]: code relating the cell's tile to that prototype
- stride: number of cells per row; index = y * stride + x

Fingerprints are 64-bit hashes; a collision between distinct content is an
accepted risk. With check_collisions enabled, every match is verified pixel
for pixel and mismatches are logged and counted, without changing the result.
"""

import logging
from collections import Counter
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import numpy as np

from tex_core.config import ParseSettings
from tex_core.grid import grid_shape, image_size, partition
from tex_core.orientation import NUM_ORIENTATIONS, invert_orientation, variants
from tex_core.pixel_hash import format_fingerprint, hash_tile
from tex_core.types import Fingerprint, Image, OrientationCode, Tile, as_rgba
from tex_io.errors import LoadError
from tex_io.source import load_source_image

logger = logging.getLogger(__name__)


# =============================================================================
# Types
# =============================================================================


@dataclass
class DedupReceipt:
    """
    Summary of one Extract+Dedup pass.

    {
        "cells": 64,
        "unique": 11,
        "stride": 8,
        ...
    }
    """
    width: int                # Source image width in pixels
    height: int               # Source image height in pixels
    tile_size: int
    stride: int               # Cells per row
    rows: int
    cells: int                # Cell records produced (stride * rows)
    unique: int               # Prototype registry size
    orientation_counts: Dict[int, int] = field(default_factory=dict)
    collisions: int = 0       # Fingerprint matches with differing pixels (audit only)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CellRecord:
    """One cell's resolution: which prototype, in which orientation."""
    index: int
    x: int
    y: int
    fingerprint: Fingerprint
    orientation: OrientationCode


# =============================================================================
# ImageSet
# =============================================================================


class ImageSet:
    """
    Builds the unique set of tiles in one source image.

    Usage:
        >>> image_set = ImageSet("texture.png")
        >>> receipt = image_set.process()
        >>> receipt.unique <= receipt.cells
        True
    """

    def __init__(
        self,
        source_path: Optional[Union[str, Path]] = None,
        settings: Optional[ParseSettings] = None,
    ):
        self.source_path = Path(source_path) if source_path is not None else None
        self.settings = settings if settings is not None else ParseSettings()

        self.proto_images: Dict[Fingerprint, Tile] = {}
        self.images: List[Fingerprint] = []
        self.orientations: List[OrientationCode] = []
        self.stride = 0
        self.rows = 0
        self.source_size: Tuple[int, int] = (0, 0)
        self.collisions = 0

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def process(self) -> DedupReceipt:
        """
        Load the source image, then partition and deduplicate it.

        Raises:
            ValueError: If the set was created without a source path
            LoadError: If the source image cannot be loaded; no cell
                records are produced in that case
        """
        if self.source_path is None:
            raise ValueError("ImageSet.process() requires a source_path")

        try:
            source = load_source_image(self.source_path)
        except LoadError as e:
            logger.error("%s", e)
            raise

        return self.process_image(source)

    def process_image(self, image: Image) -> DedupReceipt:
        """
        Run Extract+Dedup over an already decoded image.

        Registry and cell records are rebuilt from scratch on every call.

        Args:
            image: (H, W, 3|4) uint8 array, or (H, W) grayscale

        Returns:
            DedupReceipt summarizing the pass
        """
        source = as_rgba(image)
        width, height = image_size(source)
        tile_size = self.settings.tile_size
        shape = grid_shape(width, height, tile_size)

        self.proto_images = {}
        self.collisions = 0
        self.source_size = (width, height)
        self.stride = shape.num_cols
        self.rows = shape.num_rows
        self.images = [Fingerprint(0)] * shape.num_cells
        self.orientations = [OrientationCode(0)] * shape.num_cells

        if shape.num_cells == 0:
            logger.warning(
                "Source image %dx%d is smaller than one %dpx tile; no cells extracted",
                width, height, tile_size,
            )

        for x, y, tile in partition(source, tile_size):
            self.add_image(tile, x, y)

        receipt = self.receipt()
        logger.info(
            "Deduplicated %d cells (%dx%d grid) into %d unique tiles",
            receipt.cells, receipt.stride, receipt.rows, receipt.unique,
        )
        return receipt

    # -------------------------------------------------------------------------
    # Per-cell dedup
    # -------------------------------------------------------------------------

    def add_image(self, tile: Tile, x: int, y: int) -> OrientationCode:
        """
        Resolve one cell against the prototype registry.

        Variants are hashed in code order 0..7 and the lowest code whose
        fingerprint is already registered wins. Otherwise the tile itself is
        registered as a new prototype with orientation 0.

        Args:
            tile: tile_size × tile_size × 4 array
            x, y: Cell coordinates within the current grid

        Returns:
            The orientation code recorded for the cell

        Raises:
            ValueError: If (x, y) is outside the grid or the tile has the
                wrong shape
        """
        if not (0 <= x < self.stride and 0 <= y < self.rows):
            raise ValueError(f"Cell ({x}, {y}) outside {self.stride}x{self.rows} grid")
        ts = self.settings.tile_size
        if tile.shape[:2] != (ts, ts):
            raise ValueError(f"Tile must be {ts}x{ts}, got {tile.shape[1]}x{tile.shape[0]}")

        index = y * self.stride + x
        first_hash: Optional[Fingerprint] = None

        for code, variant in enumerate(variants(tile)):
            fingerprint = hash_tile(variant)
            if code == 0:
                first_hash = fingerprint

            prototype = self.proto_images.get(fingerprint)
            if prototype is not None:
                if self.settings.check_collisions:
                    self._audit_match(prototype, variant, fingerprint, x, y)
                self.images[index] = fingerprint
                self.orientations[index] = OrientationCode(code)
                return OrientationCode(code)

        self.proto_images[first_hash] = np.array(tile, copy=True)
        self.images[index] = first_hash
        self.orientations[index] = OrientationCode(0)
        return OrientationCode(0)

    def _audit_match(self, prototype: Tile, variant: Tile, fingerprint: Fingerprint, x: int, y: int) -> None:
        if np.array_equal(prototype, variant):
            return
        self.collisions += 1
        logger.warning(
            "Fingerprint collision at cell (%d, %d): %s matches a prototype with different pixels",
            x, y, format_fingerprint(fingerprint),
        )

    # -------------------------------------------------------------------------
    # Read-only views for exporters and reporters
    # -------------------------------------------------------------------------

    def get_x(self, index: int) -> int:
        """Grid column of a cell index."""
        return index % self.stride

    def get_y(self, index: int) -> int:
        """Grid row of a cell index."""
        return index // self.stride

    @property
    def cell_count(self) -> int:
        return len(self.images)

    @property
    def unique_count(self) -> int:
        return len(self.proto_images)

    def cells(self) -> Iterator[CellRecord]:
        """Cell records in index (row-major) order."""
        for index, fingerprint in enumerate(self.images):
            yield CellRecord(
                index=index,
                x=self.get_x(index),
                y=self.get_y(index),
                fingerprint=fingerprint,
                orientation=self.orientations[index],
            )

    def cell_tile(self, index: int) -> Tile:
        """
        Rebuild a cell's pixels from its prototype and orientation.

        The recorded variant of the cell equals the prototype, so undoing
        that orientation on the prototype yields the cell's own tile.
        """
        prototype = self.proto_images[self.images[index]]
        return invert_orientation(prototype, self.orientations[index])

    def receipt(self) -> DedupReceipt:
        counts = Counter(int(code) for code in self.orientations)
        width, height = self.source_size
        return DedupReceipt(
            width=width,
            height=height,
            tile_size=self.settings.tile_size,
            stride=self.stride,
            rows=self.rows,
            cells=self.cell_count,
            unique=self.unique_count,
            orientation_counts={code: counts.get(code, 0) for code in range(NUM_ORIENTATIONS)},
            collisions=self.collisions,
        )
