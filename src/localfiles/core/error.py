# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout localfiles.

This module defines the common `LFError` exception and its subclasses
distinguishing missing paths, denied access, generic I/O failures, invalid or
unsafe archives, and moves that copied the file but could not remove the
source. Every `OSError` raised by the filesystem is translated into one of
these types by `translate_os_error`, with the original error chained.
"""

from pathlib import Path


class LFError(Exception):
    """Common exception type for all recoverable localfiles errors."""

    pass


class LFNotFoundError(LFError):
    """Raised when a path required by an operation does not exist."""

    pass


class LFPermissionError(LFError):
    """Raised when a path cannot be opened, created, or modified due to missing permissions."""

    pass


class LFIOError(LFError):
    """Raised when reading, writing, or streaming file content fails."""

    pass


class LFArchiveError(LFError):
    """Raised when an archive is malformed or unsafe to extract."""

    pass


class LFPartialMoveError(LFError):
    """
    Raised when a file was copied to its destination but the source could not be removed.

    The content at the destination is complete and valid.
    """

    def __init__(self, message: str, source: Path, destination: Path):
        super().__init__(message)
        self.source = source
        self.destination = destination


def translate_os_error(error: OSError, message: str) -> LFError:
    """
    Convert an OSError into the matching localfiles exception.

    Args:
        error (OSError): The error raised by the filesystem.
        message (str): Description of the failed action, naming the path(s) involved.

    Returns:
        LFError: LFNotFoundError, LFPermissionError or LFIOError carrying
            the message followed by the original error.
    """
    if isinstance(error, FileNotFoundError):
        cls = LFNotFoundError
    elif isinstance(error, PermissionError):
        cls = LFPermissionError
    else:
        cls = LFIOError

    return cls(f"{message}: {error.strerror or error}.")
