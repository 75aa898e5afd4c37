# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
import shutil
from pathlib import Path
from typing import BinaryIO

from localfiles.core.common import permission_bits
from localfiles.core.config import CFG
from localfiles.core.error import translate_os_error
from localfiles.core.logger import get_logger

logger = get_logger(__name__)


class Copier:
    """
    Copies the content and permission bits of a single file.
    """

    def __init__(self, source: Path, destination: Path):
        """
        Initialize the Copier.

        Args:
            source (Path): The file to copy.
            destination (Path): The path of the copy. Created or truncated.
        """
        self._source = source
        self._destination = destination

    def copy(self) -> None:
        """
        Copy the content of the source file to the destination and then
        apply the permission bits of the source to the destination.

        The destination is only created once the source has been opened,
        so a missing or unreadable source leaves no destination file behind.
        A destination left incomplete by a failed copy is not removed.

        Raises:
            LFNotFoundError: If the source (or the destination's directory) does not exist.
            LFPermissionError: If the source cannot be read or the destination cannot be written.
            LFIOError: If streaming the content or closing the destination fails.
        """
        logger.debug(f"Copying '{self._source}' to '{self._destination}'.")

        try:
            source = self._source.open("rb")
        except OSError as e:
            raise translate_os_error(e, f"Could not open '{self._source}'") from e

        with source:
            try:
                destination = self._destination.open("wb")
            except OSError as e:
                raise translate_os_error(
                    e, f"Could not create '{self._destination}'"
                ) from e

            self._copyContent(source, destination)

        self._copyMode()

    def _copyContent(self, source: BinaryIO, destination: BinaryIO) -> None:
        """
        Stream all bytes from `source` into `destination` and close `destination`.

        An error raised while closing `destination` is only reported if the
        copy itself succeeded.

        Raises:
            LFError: If the copy fails, or if closing the destination fails after a successful copy.
        """
        copy_error: OSError | None = None
        try:
            shutil.copyfileobj(source, destination, CFG.copier.chunk_size)
        except OSError as e:
            copy_error = e

        try:
            destination.close()
        except OSError as e:
            if copy_error is None:
                raise translate_os_error(
                    e, f"Could not close '{self._destination}'"
                ) from e
            logger.debug(
                f"Ignoring close error of '{self._destination}' after a failed copy: {e}."
            )

        if copy_error is not None:
            raise translate_os_error(
                copy_error,
                f"Could not copy '{self._source}' to '{self._destination}'",
            ) from copy_error

    def _copyMode(self) -> None:
        """
        Apply the permission bits of the source to the destination.

        Raises:
            LFError: If the source cannot be inspected or the mode cannot be applied.
        """
        try:
            mode = permission_bits(os.stat(self._source).st_mode)
        except OSError as e:
            raise translate_os_error(e, f"Could not inspect '{self._source}'") from e

        logger.debug(f"Setting mode of '{self._destination}' to {oct(mode)}.")
        try:
            os.chmod(self._destination, mode)
        except OSError as e:
            raise translate_os_error(
                e, f"Could not set permissions of '{self._destination}'"
            ) from e
