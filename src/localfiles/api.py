# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Functional interface of localfiles.

Each function performs one complete, synchronous operation on the local
filesystem and raises an `LFError` subclass on failure. Paths may be given
as strings or `Path` objects.
"""

from collections.abc import Iterable
from pathlib import Path

from localfiles.archive import Builder, Extractor
from localfiles.core.common import to_path
from localfiles.core.logger import get_logger
from localfiles.core.outcome import MoveOutcome
from localfiles.files import Copier, Deleter, Mover

logger = get_logger(__name__)


def extract_archive(archive: Path | str, destination: Path | str) -> None:
    """
    Extract a zip archive into a directory.

    Args:
        archive (Path | str): The archive to extract.
        destination (Path | str): The directory to extract into. Created if missing.

    Raises:
        LFError: If the extraction fails.
    """
    Extractor(to_path(archive)).extract(to_path(destination))
    logger.debug(f"Extracted '{archive}' into '{destination}'.")


def build_archive(
    archive: Path | str, files: Iterable[Path | str], keep_paths: bool = False
) -> None:
    """
    Create a zip archive from a list of files.

    Args:
        archive (Path | str): The archive to create. An existing file is overwritten.
        files (Iterable[Path | str]): Files to add, in order.
        keep_paths (bool): Store full paths instead of base names. Defaults to False.

    Raises:
        LFError: If building the archive fails.
    """
    Builder(to_path(archive), keep_paths).build(to_path(f) for f in files)
    logger.debug(f"Created archive '{archive}'.")


def move_file(source: Path | str, destination: Path | str) -> MoveOutcome:
    """
    Move a file, renaming it if both paths share a volume.

    Args:
        source (Path | str): The file to move.
        destination (Path | str): The new path of the file.

    Returns:
        MoveOutcome: How the file was moved.

    Raises:
        LFPartialMoveError: If the file was copied but the source could not be removed.
        LFError: If the move fails.
    """
    outcome = Mover(to_path(source), to_path(destination)).move()
    logger.debug(f"Moved '{source}' to '{destination}' ({outcome}).")
    return outcome


def copy_file(source: Path | str, destination: Path | str) -> None:
    """
    Copy the content and permission bits of a file.

    Raises:
        LFError: If the copy fails.
    """
    Copier(to_path(source), to_path(destination)).copy()
    logger.debug(f"Copied '{source}' to '{destination}'.")


def delete_file(path: Path | str) -> None:
    """
    Delete a file. Deleting a file that does not exist succeeds.

    Raises:
        LFError: If the file exists but cannot be deleted.
    """
    Deleter(to_path(path)).delete()
