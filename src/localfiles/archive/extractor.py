# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import os
import shutil
import zipfile
import zlib
from pathlib import Path

from localfiles.core.common import permission_bits, searchable
from localfiles.core.config import CFG
from localfiles.core.error import LFArchiveError, translate_os_error
from localfiles.core.logger import get_logger

logger = get_logger(__name__)


class Extractor:
    """
    Recreates the files and directories stored in a zip archive.
    """

    def __init__(self, archive: Path):
        """
        Initialize the Extractor.

        Args:
            archive (Path): Path to the zip archive to extract.
        """
        self._archive = archive

    def extract(self, destination: Path) -> None:
        """
        Extract all entries of the archive into the destination directory.

        Entries are processed in archive order. Relative paths and permission
        bits of the entries are preserved. The destination directory is created
        if it does not exist. Existing files are overwritten.

        If extraction fails, files and directories extracted so far are left in place.

        Args:
            destination (Path): Directory to extract the archive into.

        Raises:
            LFArchiveError: If the archive is not a valid zip file, contains an entry
                pointing outside of `destination`, or exceeds the configured limits.
            LFError: If the archive cannot be read or a file or directory cannot be written.
        """
        logger.debug(f"Extracting '{self._archive}' into '{destination}'.")

        try:
            archive = zipfile.ZipFile(self._archive, "r")
        except OSError as e:
            raise translate_os_error(e, f"Could not open '{self._archive}'") from e
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise LFArchiveError(f"Could not read '{self._archive}': {e}.") from e

        with archive:
            entries = archive.infolist()
            self._checkLimits(entries)

            Extractor._makeDirs(destination, CFG.archive.default_dir_mode)
            root = destination.resolve()

            for entry in entries:
                self._extractEntry(archive, entry, root)

        logger.debug(f"Extracted {len(entries)} entries from '{self._archive}'.")

    def _extractEntry(
        self, archive: zipfile.ZipFile, entry: zipfile.ZipInfo, root: Path
    ) -> None:
        """
        Extract a single archive entry below `root`.

        Directory entries only create the directory. File entries create
        all missing ancestor directories and then the file itself.
        """
        target = self._resolveTarget(entry, root)
        mode = Extractor._entryMode(entry)

        if entry.is_dir():
            logger.debug(f"Creating directory '{target}'.")
            Extractor._makeDirs(target, mode)
            Extractor._setMode(target, mode)
            return

        Extractor._makeDirs(target.parent, searchable(mode))

        logger.debug(f"Extracting '{entry.filename}' to '{target}'.")
        try:
            source = archive.open(entry, "r")
        except (zipfile.BadZipFile, NotImplementedError, RuntimeError) as e:
            # unsupported compression or encrypted entries are reported as NotImplementedError/RuntimeError
            raise LFArchiveError(
                f"Could not read entry '{entry.filename}' of '{self._archive}': {e}."
            ) from e

        with source:
            try:
                fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            except OSError as e:
                raise translate_os_error(e, f"Could not create '{target}'") from e

            with os.fdopen(fd, "wb") as file:
                try:
                    shutil.copyfileobj(source, file, CFG.copier.chunk_size)
                except (zipfile.BadZipFile, zlib.error, EOFError) as e:
                    # corrupted or truncated compressed data
                    raise LFArchiveError(
                        f"Could not read entry '{entry.filename}' of '{self._archive}': {e}."
                    ) from e
                except OSError as e:
                    raise translate_os_error(e, f"Could not write '{target}'") from e

        Extractor._setMode(target, mode)

    def _resolveTarget(self, entry: zipfile.ZipInfo, root: Path) -> Path:
        """
        Get the path an entry is extracted to.

        Raises:
            LFArchiveError: If the entry would be extracted outside of `root`.
        """
        target = (root / entry.filename).resolve()
        if not target.is_relative_to(root) or (target == root and not entry.is_dir()):
            raise LFArchiveError(
                f"Entry '{entry.filename}' of '{self._archive}' points outside of the destination directory."
            )
        return target

    def _checkLimits(self, entries: list[zipfile.ZipInfo]) -> None:
        """
        Make sure the archive does not exceed the configured number of entries and total size.

        Raises:
            LFArchiveError: If any limit is exceeded.
        """
        if (
            max_entries := CFG.archive.max_entries
        ) is not None and len(entries) > max_entries:
            raise LFArchiveError(
                f"Archive '{self._archive}' contains {len(entries)} entries, the limit is {max_entries}."
            )

        if (max_total_size := CFG.archive.max_total_size) is not None and (
            total_size := sum(entry.file_size for entry in entries)
        ) > max_total_size:
            raise LFArchiveError(
                f"Archive '{self._archive}' contains {total_size} bytes of data, the limit is {max_total_size} bytes."
            )

    @staticmethod
    def _entryMode(entry: zipfile.ZipInfo) -> int:
        """
        Get the permission bits stored in an archive entry.

        Entries written without Unix permissions get the configured default mode.
        """
        if mode := permission_bits(entry.external_attr >> 16):
            return mode

        return (
            CFG.archive.default_dir_mode
            if entry.is_dir()
            else CFG.archive.default_file_mode
        )

    @staticmethod
    def _makeDirs(directory: Path, mode: int) -> None:
        """
        Create a directory and all its missing ancestors.

        Only a newly created `directory` itself gets `mode` (masked by umask).

        Raises:
            LFError: If the directory cannot be created.
        """
        try:
            os.makedirs(directory, mode=mode, exist_ok=True)
        except OSError as e:
            raise translate_os_error(e, f"Could not create directory '{directory}'") from e

    @staticmethod
    def _setMode(path: Path, mode: int) -> None:
        """
        Apply `mode` to `path` exactly, regardless of umask.

        Raises:
            LFError: If the mode cannot be applied.
        """
        try:
            os.chmod(path, mode)
        except OSError as e:
            raise translate_os_error(e, f"Could not set permissions of '{path}'") from e
