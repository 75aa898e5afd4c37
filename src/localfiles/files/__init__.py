# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Operations on single local files.

This module provides the `Copier` class, which duplicates the content and
permissions of a file, the `Mover` class, which relocates a file by renaming
it or, across volumes, by copying and deleting it, and the `Deleter` class,
which removes a file while tolerating an already missing one.
"""

from .copier import Copier
from .deleter import Deleter
from .mover import Mover

__all__ = [
    "Copier",
    "Deleter",
    "Mover",
]
