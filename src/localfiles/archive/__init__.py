# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Utilities for building and extracting zip archives.

This module provides the `Builder` class, which packs files into a
deflate-compressed zip archive, and the `Extractor` class, which recreates
the tree stored in a zip archive on disk.
"""

from .builder import Builder
from .extractor import Extractor

__all__ = [
    "Builder",
    "Extractor",
]
