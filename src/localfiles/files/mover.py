# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
from pathlib import Path

from localfiles.core.common import probe_access
from localfiles.core.error import LFPartialMoveError, translate_os_error
from localfiles.core.logger import get_logger
from localfiles.core.outcome import MoveOutcome
from localfiles.files.copier import Copier
from localfiles.volume import VolumeInterface, VolumeMeta

logger = get_logger(__name__)


class Mover:
    """
    Moves a single file, renaming it in place whenever possible.
    """

    def __init__(
        self,
        source: Path,
        destination: Path,
        volume: type[VolumeInterface] | None = None,
    ):
        """
        Initialize the Mover.

        Args:
            source (Path): The file to move.
            destination (Path): The new path of the file.
            volume (type[VolumeInterface] | None): Volume detection backend.
                If not provided, the backend is selected from the environment,
                the configuration, or guessed for the current platform.
        """
        self._source = source
        self._destination = destination
        self._volume = volume or VolumeMeta.fromConfigOrGuess()

    def move(self) -> MoveOutcome:
        """
        Move the source file to the destination.

        If both paths reside on the same volume, the file is renamed, which is atomic.
        Otherwise, the file is copied to the destination (content and permissions)
        and then removed from its original location.

        Returns:
            MoveOutcome: How the move was carried out.

        Raises:
            LFError: If the file could not be moved. The source is left untouched.
            LFPartialMoveError: If the file was copied to the destination,
                but the source could not be removed.
        """
        if self._volume.sameVolume(self._source, self._destination.parent):
            self._rename()
            return MoveOutcome.RENAMED

        logger.debug(
            f"'{self._source}' and '{self._destination}' are on different volumes."
        )
        # make sure the source can be removed before copying anything
        probe_access(self._source)
        Copier(self._source, self._destination).copy()
        return self._removeSource()

    def _rename(self) -> None:
        """
        Rename the source to the destination.

        Raises:
            LFError: If the rename fails.
        """
        logger.debug(f"Renaming '{self._source}' to '{self._destination}'.")
        try:
            os.rename(self._source, self._destination)
        except OSError as e:
            raise translate_os_error(
                e, f"Could not move '{self._source}' to '{self._destination}'"
            ) from e

    def _removeSource(self) -> MoveOutcome:
        """
        Remove the source after it has been copied to the destination.

        Returns:
            MoveOutcome: COPIED, or SOURCE_ALREADY_REMOVED if the source no longer exists.

        Raises:
            LFPartialMoveError: If the source exists but could not be removed.
        """
        logger.debug(f"Removing the moved file '{self._source}'.")
        try:
            os.remove(self._source)
        except FileNotFoundError:
            logger.warning(
                f"File moved to '{self._destination}', but '{self._source}' could not be removed: removed by someone else."
            )
            return MoveOutcome.SOURCE_ALREADY_REMOVED
        except OSError as e:
            raise LFPartialMoveError(
                f"File moved to '{self._destination}', but '{self._source}' could not be removed: {e.strerror or e}.",
                self._source,
                self._destination,
            ) from e

        return MoveOutcome.COPIED
