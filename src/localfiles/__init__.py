# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Local filesystem convenience operations.

localfiles extracts and builds zip archives, copies files together with their
permission bits, moves files (renaming them in place on the same volume and
copying them across volumes), and deletes files while tolerating ones that
are already gone. All operations are synchronous and raise `LFError`
subclasses on failure.
"""

from .api import build_archive, copy_file, delete_file, extract_archive, move_file
from .core.error import (
    LFArchiveError,
    LFError,
    LFIOError,
    LFNotFoundError,
    LFPartialMoveError,
    LFPermissionError,
)
from .core.outcome import MoveOutcome

__version__ = "0.3.0"

__all__ = [
    "__version__",
    "build_archive",
    "copy_file",
    "delete_file",
    "extract_archive",
    "move_file",
    "LFArchiveError",
    "LFError",
    "LFIOError",
    "LFNotFoundError",
    "LFPartialMoveError",
    "LFPermissionError",
    "MoveOutcome",
    "archive",
    "core",
    "files",
    "volume",
]
