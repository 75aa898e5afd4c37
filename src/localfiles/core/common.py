# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for the localfiles library.

This module provides helpers shared by the file and archive operations:
path normalization, access probing and permission-bit manipulation.
"""

import os
import stat
from pathlib import Path

from .error import translate_os_error
from .logger import get_logger

logger = get_logger(__name__)


def to_path(path: Path | str) -> Path:
    """
    Convert a string or path-like object to a Path.

    Args:
        path (Path | str): The path to convert.

    Returns:
        Path: The converted path.
    """
    return path if isinstance(path, Path) else Path(path)


def probe_access(path: Path) -> None:
    """
    Check that a file exists and can be opened for reading and writing.

    The file is opened and immediately closed; its content is not modified.

    Args:
        path (Path): The file to probe.

    Raises:
        LFNotFoundError: If the file does not exist.
        LFPermissionError: If the file cannot be opened for reading and writing.
        LFIOError: If opening or closing the file fails for any other reason.
    """
    logger.debug(f"Probing read/write access to '{path}'.")
    try:
        fd = os.open(path, os.O_RDWR)
    except OSError as e:
        raise translate_os_error(e, f"Could not access '{path}'") from e

    try:
        os.close(fd)
    except OSError as e:
        raise translate_os_error(e, f"Could not close '{path}'") from e


def permission_bits(mode: int) -> int:
    """
    Extract the permission bits (including setuid, setgid and sticky bits) from a file mode.
    """
    return stat.S_IMODE(mode)


def searchable(mode: int) -> int:
    """
    Return the directory mode corresponding to `mode` with search permission
    added for every class (user, group, others) that may read.

    Args:
        mode (int): Permission bits, typically taken from a file.

    Returns:
        int: Permission bits usable for a directory.
    """
    mode = permission_bits(mode)
    if mode & stat.S_IRUSR:
        mode |= stat.S_IXUSR
    if mode & stat.S_IRGRP:
        mode |= stat.S_IXGRP
    if mode & stat.S_IROTH:
        mode |= stat.S_IXOTH
    return mode
