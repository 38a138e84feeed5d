"""
tex_core: Core primitives for the texture tile deduplicator.

Provides:
- types: Fingerprint, OrientationCode, Tile and Cell definitions
- config: Tile size and output naming constants, ParseSettings
- pixel_hash: FNV-1a 64 fingerprint of RGBA pixel content
- orientation: The 8 mirror/rotation variants of a tile and their labels
- grid: Row-major partition of a source image into square tiles
"""

__all__ = [
    "config",
    "grid",
    "orientation",
    "pixel_hash",
    "types",
]
