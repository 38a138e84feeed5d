"""
Configuration for texture parsing runs.

Module constants hold the fixed defaults; ParseSettings carries the values
for one run and is built by the CLI or by callers directly.
"""

from dataclasses import dataclass
from pathlib import Path

# ───── DEFAULTS ─────

TILE_SIZE = 128              # Edge length of each square tile, in pixels

IMAGES_DIR_NAME = "images"   # Prototype tiles are written here as <hex>.png
REPORT_FILE_NAME = "report.html"
REPORT_TITLE = "SC4 Texture Parse Report"

PREVIEW_MAX_EDGE = 640       # Longer edge of the source preview in the report
THUMBNAIL_EDGE = 32          # Edge of each cell thumbnail in the report


@dataclass(frozen=True)
class ParseSettings:
    """
    Settings for one parse run.

    - tile_size: pixel edge length of each square tile
    - output_dir: directory receiving the images directory and the report
    - check_collisions: compare pixels whenever fingerprints match and log
      mismatches (results are unchanged either way)
    """
    tile_size: int = TILE_SIZE
    output_dir: Path = Path(".")
    check_collisions: bool = False

    def __post_init__(self):
        if isinstance(self.tile_size, bool) or not isinstance(self.tile_size, int):
            raise ValueError(f"tile_size must be an int, got {self.tile_size!r}")
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "output_dir", Path(self.output_dir))

    @property
    def images_dir(self) -> Path:
        return self.output_dir / IMAGES_DIR_NAME

    @property
    def report_path(self) -> Path:
        return self.output_dir / REPORT_FILE_NAME
