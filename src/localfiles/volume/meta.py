# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
from abc import ABCMeta

from localfiles.core.config import CFG
from localfiles.core.error import LFError
from localfiles.core.logger import get_logger
from localfiles.volume.interface import VolumeInterface

logger = get_logger(__name__)


class VolumeMeta(ABCMeta):
    """
    Metaclass for volume detection backends.
    """

    # registry of supported volume backends
    _registry: dict[str, type[VolumeInterface]] = {}

    def __str__(cls: type[VolumeInterface]):
        """
        Get the string representation of the volume backend class.
        """
        return cls.envName()

    @classmethod
    def register(cls, volume_cls: type[VolumeInterface]):
        """
        Register a volume backend class in the metaclass registry.

        Args:
            volume_cls: Subclass of VolumeInterface to register.
        """
        cls._registry[volume_cls.envName()] = volume_cls

    @classmethod
    def fromStr(mcs, name: str) -> type[VolumeInterface]:
        """
        Return the volume backend class registered with the given name.

        Raises:
            LFError: If no class is registered for the given name.
        """
        try:
            return mcs._registry[name]
        except KeyError as e:
            raise LFError(f"No volume backend registered as '{name}'.") from e

    @classmethod
    def guess(mcs) -> type[VolumeInterface]:
        """
        Attempt to select an appropriate volume backend.

        The method scans through all registered backends in the order
        they were registered and returns the first one that reports itself
        as available.

        Raises:
            LFError: If no available backend is found among the registered ones.

        Returns:
            type[VolumeInterface]: The first available volume backend class.
        """
        for Volume in mcs._registry.values():
            if Volume.isAvailable():
                logger.debug(f"Guessed volume backend: {str(Volume)}.")
                return Volume

        raise LFError(
            "Could not guess a volume backend. No registered volume backend available."
        )

    @classmethod
    def fromConfigOrGuess(mcs) -> type[VolumeInterface]:
        """
        Select a volume backend based on the environment, the configuration or by guessing.

        The environment variable takes precedence over the `volume.backend`
        configuration option. If neither is set, `guess` is used.

        Returns:
            type[VolumeInterface]: The selected volume backend class.

        Raises:
            LFError: If the selected name is not registered,
                    or if no available backend can be guessed.
        """
        if name := os.environ.get(CFG.env_vars.volume_backend):
            logger.debug(
                f"Using volume backend name from an environment variable: {name}."
            )
            return VolumeMeta.fromStr(name)

        if name := CFG.volume.backend:
            logger.debug(f"Using volume backend name from the configuration: {name}.")
            return VolumeMeta.fromStr(name)

        return VolumeMeta.guess()
