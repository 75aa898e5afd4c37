# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import shutil
import zipfile
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from localfiles.core.config import CFG
from localfiles.core.error import LFArchiveError, translate_os_error
from localfiles.core.logger import get_logger

logger = get_logger(__name__)


class Builder:
    """
    Packs a list of files into a single zip archive.
    """

    def __init__(self, archive: Path, keep_paths: bool = False):
        """
        Initialize the Builder.

        Args:
            archive (Path): Path of the zip archive to create. An existing file is overwritten.
            keep_paths (bool): If True, each entry is named by the path of the file as provided
                (without a drive or leading separators), preserving the directory structure
                on extraction. If False, only the base name of the file is stored. Defaults to False.
        """
        self._archive = archive
        self._keep_paths = keep_paths

    def build(self, files: Iterable[Path]) -> None:
        """
        Create the archive containing the specified files, in the given order.

        Each file is stored as a separate deflate-compressed entry together with
        its size, permission bits and modification time.

        If any file cannot be added, building stops immediately and the
        partially written archive is left on disk.

        Args:
            files (Iterable[Path]): Files to add to the archive.

        Raises:
            LFError: If the archive cannot be created, any file cannot be read,
                or writing into the archive fails.
        """
        logger.debug(f"Creating archive '{self._archive}'.")

        try:
            archive = zipfile.ZipFile(self._archive, "w", zipfile.ZIP_DEFLATED)
        except OSError as e:
            raise translate_os_error(e, f"Could not create '{self._archive}'") from e

        with archive:
            for file in files:
                self._addFile(archive, file)

    def _addFile(self, archive: zipfile.ZipFile, file: Path) -> None:
        """
        Add a single file as a new entry of the archive.

        Raises:
            LFError: If the file cannot be opened or inspected, or the entry cannot be written.
        """
        logger.debug(f"Adding '{file}' to '{self._archive}'.")
        try:
            source = file.open("rb")
        except OSError as e:
            raise translate_os_error(e, f"Could not open '{file}'") from e

        with source:
            entry = self._makeEntry(file)
            if entry.filename in archive.NameToInfo:
                logger.warning(
                    f"Archive '{self._archive}' already contains an entry named '{entry.filename}'. Adding '{file}' as a duplicate entry."
                )
            self._writeEntry(archive, entry, source)

    def _makeEntry(self, file: Path) -> zipfile.ZipInfo:
        """
        Create the header of the entry for `file` from its metadata.

        Raises:
            LFError: If the file cannot be inspected.
        """
        try:
            entry = zipfile.ZipInfo.from_file(
                file,
                arcname=None if self._keep_paths else file.name,
                strict_timestamps=False,
            )
        except OSError as e:
            raise translate_os_error(e, f"Could not inspect '{file}'") from e

        entry.compress_type = zipfile.ZIP_DEFLATED
        # ZipFile.open() ignores the archive-wide compression level for explicit entries
        if hasattr(entry, "compress_level"):
            entry.compress_level = CFG.archive.compression_level
        else:
            # Python 3.12 only exposes the level under its old name
            setattr(entry, "_compresslevel", CFG.archive.compression_level)
        return entry

    def _writeEntry(
        self, archive: zipfile.ZipFile, entry: zipfile.ZipInfo, source: BinaryIO
    ) -> None:
        """
        Stream the content of `source` into a new archive entry.

        Raises:
            LFArchiveError: If the entry exceeds the limits of the zip format.
            LFError: If writing the entry fails.
        """
        try:
            with archive.open(entry, "w") as target:
                shutil.copyfileobj(source, target, CFG.copier.chunk_size)
        except zipfile.LargeZipFile as e:
            raise LFArchiveError(
                f"Could not write '{entry.filename}' into '{self._archive}': {e}."
            ) from e
        except OSError as e:
            raise translate_os_error(
                e, f"Could not write '{entry.filename}' into '{self._archive}'"
            ) from e
