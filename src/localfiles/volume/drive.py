# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
from pathlib import Path

from localfiles.core.logger import get_logger
from localfiles.volume.interface import VolumeInterface
from localfiles.volume.meta import VolumeMeta

logger = get_logger(__name__)


class DriveVolume(VolumeInterface, metaclass=VolumeMeta):
    """
    Volume detection based on the drive letter or UNC share of a path.

    Paths are made absolute before comparison and drive names are compared
    case-insensitively, e.g. `C:` and `c:` denote the same volume.
    """

    @staticmethod
    def envName() -> str:
        return "drive"

    @staticmethod
    def isAvailable() -> bool:
        return os.name == "nt"

    @staticmethod
    def sameVolume(a: Path, b: Path) -> bool:
        drive_a = DriveVolume._getDrive(a)
        drive_b = DriveVolume._getDrive(b)
        logger.debug(f"Drive of '{a}': '{drive_a}'. Drive of '{b}': '{drive_b}'.")
        return drive_a == drive_b

    @staticmethod
    def _getDrive(path: Path) -> str:
        """
        Get the normalized drive (or UNC share) of a path.
        """
        drive, _ = os.path.splitdrive(os.path.abspath(path))
        return drive.casefold()
