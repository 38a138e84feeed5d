"""
tex_dedup: Tile deduplication engine.

Modules:
- image_set.py: ImageSet (registry of unique prototypes + per-cell records)
"""

from .image_set import DedupReceipt, ImageSet

__all__ = ["DedupReceipt", "ImageSet"]
