# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from pathlib import Path

from localfiles.volume.interface import VolumeInterface
from localfiles.volume.meta import VolumeMeta


class SingleVolume(VolumeInterface, metaclass=VolumeMeta):
    """
    Fallback volume detection for platforms without a volume concept.

    All paths are considered to reside on the same volume, so files are
    always moved by renaming them.
    """

    @staticmethod
    def envName() -> str:
        return "single"

    @staticmethod
    def isAvailable() -> bool:
        return True

    @staticmethod
    def sameVolume(a: Path, b: Path) -> bool:
        return True
