# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from abc import ABC
from pathlib import Path


class VolumeInterface(ABC):
    """
    Abstract base class for volume detection backends.

    A backend decides whether two paths reside on the same storage volume,
    i.e., whether a file can be moved between them by an atomic rename.

    Concrete backends are used as classes and implement all methods as static methods.
    """

    @staticmethod
    def envName() -> str:
        """
        Return the name of the volume detection backend.

        Returns:
            str: The backend name.
        """
        raise NotImplementedError(
            "envName method is not implemented for this volume backend"
        )

    @staticmethod
    def isAvailable() -> bool:
        """
        Determine whether the backend can be used on the current platform.

        Returns:
            bool: True if the backend is usable, otherwise False.
        """
        raise NotImplementedError(
            "isAvailable method is not implemented for this volume backend"
        )

    @staticmethod
    def sameVolume(a: Path, b: Path) -> bool:
        """
        Determine whether two paths reside on the same volume.

        Neither path has to exist. A path that does not exist is considered
        to reside on the volume of its nearest existing ancestor.

        Args:
            a (Path): The first path.
            b (Path): The second path.

        Returns:
            bool: True if both paths reside on the same volume.

        Raises:
            LFError: If the volume of either path cannot be determined.
        """
        raise NotImplementedError(
            "sameVolume method is not implemented for this volume backend"
        )
