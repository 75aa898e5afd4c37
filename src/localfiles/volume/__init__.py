# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Volume detection for localfiles.

This module decides whether two paths reside on the same storage volume.
It defines the abstract `VolumeInterface`, the `VolumeMeta` registry used to
select a backend, and the concrete backends: `device` (POSIX device ids),
`drive` (Windows drive letters and UNC shares) and `single` (no volume
concept, everything is one volume).
"""

from .device import DeviceVolume
from .drive import DriveVolume
from .interface import VolumeInterface
from .meta import VolumeMeta
from .single import SingleVolume

# registration order determines the order in which backends are guessed;
# the always-available fallback must come last
VolumeMeta.register(DeviceVolume)
VolumeMeta.register(DriveVolume)
VolumeMeta.register(SingleVolume)

__all__ = [
    "DeviceVolume",
    "DriveVolume",
    "SingleVolume",
    "VolumeInterface",
    "VolumeMeta",
]
