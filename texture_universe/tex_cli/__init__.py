"""
tex_cli: Command-line entry point (sc4-texture).
"""

from .main import main

__all__ = ["main"]
