"""
Prototype tile export.

Each unique tile is written as <images_dir>/<hex fingerprint>.png so reports
can reference it by the same key the registry uses. Writes are best effort:
a failed artifact is logged and collected, already written files stay.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union

import numpy as np
from PIL import Image as PILImage

from tex_core.pixel_hash import format_fingerprint
from tex_core.types import Fingerprint, Tile

from .errors import ExportError

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """Outcome of one export pass."""
    written: List[Path] = field(default_factory=list)
    failures: List[ExportError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def artifact_name(fingerprint: int) -> str:
    """File name of a prototype tile, e.g. 'cbf29ce484222325.png'."""
    return f"{format_fingerprint(fingerprint)}.png"


def write_tile_png(tile: Tile, path: Path) -> None:
    """Encode one RGBA tile as PNG."""
    PILImage.fromarray(np.ascontiguousarray(tile, dtype=np.uint8)).save(path, format="PNG")


def write_image_files(proto_images: Dict[Fingerprint, Tile], images_dir: Union[str, Path]) -> ExportResult:
    """
    Write every prototype tile to images_dir.

    Args:
        proto_images: fingerprint -> prototype tile (ImageSet.proto_images)
        images_dir: Target directory, created if missing

    Returns:
        ExportResult listing written paths and per-artifact failures
    """
    images_dir = Path(images_dir)
    result = ExportResult()

    try:
        images_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("An error occurred while creating the images directory %s. Error: %s", images_dir, e)

    for fingerprint in sorted(proto_images):
        path = images_dir / artifact_name(fingerprint)
        try:
            write_tile_png(proto_images[fingerprint], path)
        except (OSError, ValueError) as e:
            error = ExportError(path, f"Failed to write {path}: {e}", fingerprint=fingerprint)
            logger.error("%s", error)
            result.failures.append(error)
            continue
        result.written.append(path)

    logger.info("Wrote %d of %d unique tiles to %s", len(result.written), len(proto_images), images_dir)
    return result
