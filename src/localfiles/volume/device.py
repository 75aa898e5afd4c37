# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
from pathlib import Path

from localfiles.core.error import LFNotFoundError, translate_os_error
from localfiles.core.logger import get_logger
from localfiles.volume.interface import VolumeInterface
from localfiles.volume.meta import VolumeMeta

logger = get_logger(__name__)


class DeviceVolume(VolumeInterface, metaclass=VolumeMeta):
    """
    Volume detection based on the device identifier of the filesystem holding a path.

    Two paths are on the same volume if the nearest existing ancestors of
    both paths report the same `st_dev`. Every mount point is a distinct volume.
    """

    @staticmethod
    def envName() -> str:
        return "device"

    @staticmethod
    def isAvailable() -> bool:
        return os.name == "posix"

    @staticmethod
    def sameVolume(a: Path, b: Path) -> bool:
        dev_a = DeviceVolume._getDevice(a)
        dev_b = DeviceVolume._getDevice(b)
        logger.debug(f"Device of '{a}': {dev_a}. Device of '{b}': {dev_b}.")
        return dev_a == dev_b

    @staticmethod
    def _getDevice(path: Path) -> int:
        """
        Get the device identifier of the nearest existing ancestor of `path` (including `path` itself).

        Args:
            path (Path): The path to inspect.

        Returns:
            int: The `st_dev` of the nearest existing path.

        Raises:
            LFError: If a path exists but cannot be inspected.
        """
        for candidate in [path.absolute(), *path.absolute().parents]:
            try:
                return os.stat(candidate).st_dev
            except FileNotFoundError:
                continue
            except OSError as e:
                raise translate_os_error(
                    e, f"Could not determine the volume of '{path}'"
                ) from e

        raise LFNotFoundError(
            f"Could not determine the volume of '{path}': no existing ancestor."
        )
