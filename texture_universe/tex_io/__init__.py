"""
tex_io: Boundary collaborators of the deduplicator.

Modules:
- errors.py: LoadError, ExportError, ReportError
- source.py: PNG source image loading
- export.py: Prototype tile PNG writer
- report.py: HTML parse report
"""

from .errors import ExportError, LoadError, ReportError, TextureError
from .source import describe_image, load_source_image

__all__ = [
    "TextureError",
    "LoadError",
    "ExportError",
    "ReportError",
    "describe_image",
    "load_source_image",
]
