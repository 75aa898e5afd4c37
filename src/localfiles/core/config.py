# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for localfiles.

This module defines dataclasses representing all configurable aspects of
localfiles: environment variable names, archive limits and defaults, copy
buffering and the volume detection backend.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by localfiles."""

    # Enables localfiles debug mode.
    debug_mode: str = "LF_DEBUG"
    # Explicit path to the localfiles config file.
    config_file: str = "LF_CONFIG"
    # Name of the volume detection backend to use.
    volume_backend: str = "LF_VOLUME_BACKEND"


@dataclass
class ArchiveSettings:
    """Settings for building and extracting zip archives."""

    # Deflate compression level (0-9). If not set, the zlib default is used.
    compression_level: int | None = None
    # Maximal number of entries an archive may contain to be extracted.
    # If not set, the number of entries is not limited.
    max_entries: int | None = None
    # Maximal sum of declared uncompressed entry sizes (in bytes) an archive
    # may contain to be extracted. If not set, the size is not limited.
    max_total_size: int | None = None
    # Mode used for extracted files whose entry stores no permission bits.
    default_file_mode: int = 0o644
    # Mode used for extracted directories whose entry stores no permission bits.
    default_dir_mode: int = 0o755


@dataclass
class CopierSettings:
    """Settings for Copier operations."""

    # Size of the buffer (in bytes) used when streaming file content.
    chunk_size: int = 1024 * 1024


@dataclass
class VolumeSettings:
    """Settings for volume detection."""

    # Name of the volume detection backend ('device', 'drive' or 'single').
    # If not set, the backend is guessed for the current platform.
    backend: str | None = None


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by localfiles.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class Config:
    """Main configuration for localfiles."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    archive: ArchiveSettings = field(default_factory=ArchiveSettings)
    copier: CopierSettings = field(default_factory=CopierSettings)
    volume: VolumeSettings = field(default_factory=VolumeSettings)
    date_formats: DateFormats = field(default_factory=DateFormats)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(
                f"Could not read localfiles config '{config_path}': {e}."
            ) from e

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path)
            if (env_path := os.getenv(EnvironmentVariables.config_file))
            else None,
            # 2. Current working directory (for development/override)
            Path.cwd() / "localfiles_config.toml",
            # 3. XDG config home (standard user config location)
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "localfiles"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Handles nested dataclasses properly.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for localfiles.
CFG = Config.load()
