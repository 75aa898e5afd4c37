# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Enumeration of successful move outcomes.

This module defines `MoveOutcome`, an enum describing how a file move was
carried out. A failed move is reported by raising an exception instead.
"""

from enum import Enum


class MoveOutcome(Enum):
    """
    Outcome of a successful file move.
    """

    # Source and destination share a volume; the file was renamed in place.
    RENAMED = 1
    # The file was copied to another volume and the source was removed.
    COPIED = 2
    # The file was copied to another volume, but the source had already
    # been removed by someone else before it could be deleted.
    SOURCE_ALREADY_REMOVED = 3

    def __str__(self):
        return self.name.lower().replace("_", " ")

    @property
    def isPartial(self) -> bool:
        """
        Return True if the move reached its goal, but not through its own cleanup.
        """
        return self == MoveOutcome.SOURCE_ALREADY_REMOVED
