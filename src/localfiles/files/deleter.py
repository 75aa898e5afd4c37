# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
from pathlib import Path

from localfiles.core.common import probe_access
from localfiles.core.error import LFNotFoundError, translate_os_error
from localfiles.core.logger import get_logger

logger = get_logger(__name__)


class Deleter:
    """
    Removes a single file, treating an already missing file as success.
    """

    def __init__(self, path: Path):
        """
        Initialize the Deleter.

        Args:
            path (Path): The file to remove.
        """
        self._path = path

    def delete(self) -> None:
        """
        Remove the file.

        The file is first opened for reading and writing to make sure it can
        be modified. If the file does not exist (either before the call or
        because someone else removed it in the meantime), nothing is done
        and a warning is logged.

        Raises:
            LFPermissionError: If the file cannot be accessed or removed due to missing permissions.
            LFIOError: If accessing or removing the file fails for any other reason.
        """
        try:
            probe_access(self._path)
        except LFNotFoundError:
            self._logMissing()
            return

        logger.debug(f"Removing file '{self._path}'.")
        try:
            os.remove(self._path)
        except FileNotFoundError:
            self._logMissing()
        except OSError as e:
            raise translate_os_error(e, f"Could not delete '{self._path}'") from e

    def _logMissing(self) -> None:
        logger.warning(
            f"File '{self._path}' does not exist (wrong name or removed by someone else). Nothing to delete."
        )
