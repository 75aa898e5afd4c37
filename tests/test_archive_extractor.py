# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import errno
import os
import stat
import struct
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest

from localfiles.archive.extractor import Extractor
from localfiles.core.error import (
    LFArchiveError,
    LFIOError,
    LFNotFoundError,
    LFPermissionError,
)


def _entry(name: str, mode: int | None = None) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name)
    info.compress_type = zipfile.ZIP_DEFLATED
    if mode is not None:
        info.external_attr = mode << 16
    return info


def _make_archive(path: Path, entries: list[tuple[zipfile.ZipInfo, bytes]]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for info, data in entries:
            zf.writestr(info, data)
    return path


def _mode(path: Path) -> int:
    return stat.S_IMODE(os.stat(path).st_mode)


def _clear_external_attrs(path: Path) -> None:
    # writestr stores 0o600 for entries without attributes, so the attributes
    # are zeroed directly in the central directory records
    data = bytearray(path.read_bytes())
    eocd = data.rfind(b"PK\x05\x06")
    (count,) = struct.unpack_from("<H", data, eocd + 10)
    (record,) = struct.unpack_from("<I", data, eocd + 16)
    for _ in range(count):
        name_length, extra_length, comment_length = struct.unpack_from(
            "<HHH", data, record + 28
        )
        struct.pack_into("<I", data, record + 38, 0)
        record += 46 + name_length + extra_length + comment_length
    path.write_bytes(data)


def _corrupt_data(path: Path, name: str, garbage: bytes) -> None:
    with zipfile.ZipFile(path) as zf:
        header = zf.getinfo(name).header_offset
    data = bytearray(path.read_bytes())
    name_length, extra_length = struct.unpack_from("<HH", data, header + 26)
    start = header + 30 + name_length + extra_length
    data[start : start + len(garbage)] = garbage
    path.write_bytes(data)


def test_extractor_init_sets_archive():
    assert Extractor(Path("a.zip"))._archive == Path("a.zip")


def test_extractor_extracts_files_and_directories(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip",
        [
            (_entry("top.txt", 0o100644), b"top"),
            (_entry("dir/", 0o040755), b""),
            (_entry("dir/nested.txt", 0o100600), b"nested"),
            (_entry("implicit/deeper/file.bin", 0o100644), b"\x00\x01\x02"),
        ],
    )
    destination = tmp_path / "out"

    Extractor(archive).extract(destination)

    assert (destination / "top.txt").read_bytes() == b"top"
    assert (destination / "dir").is_dir()
    assert (destination / "dir" / "nested.txt").read_bytes() == b"nested"
    assert (
        destination / "implicit" / "deeper" / "file.bin"
    ).read_bytes() == b"\x00\x01\x02"


@pytest.mark.parametrize("mode", [0o600, 0o644, 0o755, 0o777, 0o400])
def test_extractor_preserves_file_mode(tmp_path, mode):
    archive = _make_archive(
        tmp_path / "in.zip", [(_entry("file", stat.S_IFREG | mode), b"x")]
    )

    Extractor(archive).extract(tmp_path / "out")

    assert _mode(tmp_path / "out" / "file") == mode


def test_extractor_uses_default_modes_without_stored_permissions(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip",
        [(_entry("dir/"), b""), (_entry("dir/file.txt"), b"content")],
    )
    _clear_external_attrs(archive)

    with zipfile.ZipFile(archive) as zf:
        assert all(info.external_attr == 0 for info in zf.infolist())

    with patch("localfiles.archive.extractor.CFG") as cfg:
        cfg.copier.chunk_size = 1024
        cfg.archive.max_entries = None
        cfg.archive.max_total_size = None
        cfg.archive.default_dir_mode = 0o750
        cfg.archive.default_file_mode = 0o604
        Extractor(archive).extract(tmp_path / "out")

    assert _mode(tmp_path / "out" / "dir") == 0o750
    assert _mode(tmp_path / "out" / "dir" / "file.txt") == 0o604
    assert (tmp_path / "out" / "dir" / "file.txt").read_text() == "content"


@pytest.mark.parametrize("mode", [0o700, 0o750, 0o775, 0o777])
def test_extractor_directory_entry_mode_ignores_umask(tmp_path, mode):
    archive = _make_archive(
        tmp_path / "in.zip", [(_entry("dir/", stat.S_IFDIR | mode), b"")]
    )

    old_umask = os.umask(0o077)
    try:
        Extractor(archive).extract(tmp_path / "out")
    finally:
        os.umask(old_umask)

    assert _mode(tmp_path / "out" / "dir") == mode


def test_extractor_directory_entry_mode_applied_to_existing_directory(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip", [(_entry("dir/", stat.S_IFDIR | 0o750), b"")]
    )
    (tmp_path / "out" / "dir").mkdir(parents=True)
    os.chmod(tmp_path / "out" / "dir", 0o700)

    Extractor(archive).extract(tmp_path / "out")

    assert _mode(tmp_path / "out" / "dir") == 0o750


def test_extractor_parent_directories_are_traversable(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip", [(_entry("dir/file.txt", 0o100640), b"content")]
    )

    Extractor(archive).extract(tmp_path / "out")

    # search permission is added where read permission is granted
    assert _mode(tmp_path / "out" / "dir") & stat.S_IXUSR


def test_extractor_overwrites_existing_files(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip", [(_entry("file.txt", 0o100644), b"new")]
    )
    destination = tmp_path / "out"
    destination.mkdir()
    (destination / "file.txt").write_text("old and longer content")

    Extractor(archive).extract(destination)

    assert (destination / "file.txt").read_text() == "new"


def test_extractor_empty_archive_creates_destination(tmp_path):
    archive = _make_archive(tmp_path / "in.zip", [])

    Extractor(archive).extract(tmp_path / "out")

    assert (tmp_path / "out").is_dir()
    assert list((tmp_path / "out").iterdir()) == []


def test_extractor_missing_archive(tmp_path):
    with pytest.raises(LFNotFoundError, match="Could not open"):
        Extractor(tmp_path / "missing.zip").extract(tmp_path / "out")


def test_extractor_not_a_zip(tmp_path):
    archive = tmp_path / "in.zip"
    archive.write_text("definitely not a zip archive")

    with pytest.raises(LFArchiveError, match="Could not read"):
        Extractor(archive).extract(tmp_path / "out")


@pytest.mark.parametrize("name", ["../evil.txt", "dir/../../evil.txt", "/abs/evil.txt"])
def test_extractor_rejects_entries_outside_destination(tmp_path, name):
    archive = _make_archive(tmp_path / "in.zip", [(_entry(name, 0o100644), b"evil")])

    with pytest.raises(LFArchiveError, match="points outside"):
        Extractor(archive).extract(tmp_path / "out")

    assert not (tmp_path / "evil.txt").exists()


def test_extractor_max_entries(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip",
        [(_entry(f"f{i}", 0o100644), b"x") for i in range(3)],
    )

    with (
        patch("localfiles.archive.extractor.CFG") as cfg,
        pytest.raises(LFArchiveError, match="contains 3 entries, the limit is 2"),
    ):
        cfg.archive.max_entries = 2
        cfg.archive.max_total_size = None
        Extractor(archive).extract(tmp_path / "out")

    # nothing is written if a limit is exceeded
    assert not (tmp_path / "out").exists()


def test_extractor_max_total_size(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip",
        [(_entry("big", 0o100644), b"0" * 10_000)],
    )

    with (
        patch("localfiles.archive.extractor.CFG") as cfg,
        pytest.raises(LFArchiveError, match="10000 bytes of data"),
    ):
        cfg.archive.max_entries = None
        cfg.archive.max_total_size = 1_000
        Extractor(archive).extract(tmp_path / "out")


def test_extractor_ancestor_creation_failure(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip", [(_entry("dir/file.txt", 0o100644), b"content")]
    )
    destination = tmp_path / "out"
    destination.mkdir()
    # a file blocks the creation of the directory
    (destination / "dir").write_text("in the way")

    with pytest.raises(LFIOError, match="Could not create directory"):
        Extractor(archive).extract(destination)


def test_extractor_file_creation_failure(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip", [(_entry("file.txt", 0o100644), b"content")]
    )

    with (
        patch(
            "localfiles.archive.extractor.os.open",
            side_effect=PermissionError(errno.EACCES, "Permission denied"),
        ),
        pytest.raises(LFPermissionError, match="Could not create"),
    ):
        Extractor(archive).extract(tmp_path / "out")


def test_extractor_stops_at_first_failure_without_rollback(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip",
        [
            (_entry("first.txt", 0o100644), b"first"),
            (_entry("../escape.txt", 0o100644), b"evil"),
            (_entry("third.txt", 0o100644), b"third"),
        ],
    )
    destination = tmp_path / "out"

    with pytest.raises(LFArchiveError):
        Extractor(archive).extract(destination)

    assert (destination / "first.txt").read_text() == "first"
    assert not (destination / "third.txt").exists()


def test_extractor_corrupted_entry(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip", [(_entry("file.txt", 0o100644), b"content" * 100)]
    )

    with (
        patch(
            "localfiles.archive.extractor.zipfile.ZipFile.open",
            side_effect=zipfile.BadZipFile("Bad magic number for file header"),
        ),
        pytest.raises(LFArchiveError, match="Could not read entry 'file.txt'"),
    ):
        Extractor(archive).extract(tmp_path / "out")


@pytest.mark.parametrize(
    "garbage",
    [
        b"\xff" * 16,  # reserved deflate block type
        b"\x00" * 16,  # stored block with mismatching lengths
    ],
)
def test_extractor_corrupted_compressed_data(tmp_path, garbage):
    archive = _make_archive(
        tmp_path / "in.zip",
        [(_entry("file.txt", 0o100644), b"some repeated content\n" * 1000)],
    )
    _corrupt_data(archive, "file.txt", garbage)

    with pytest.raises(LFArchiveError, match="Could not read entry 'file.txt'"):
        Extractor(archive).extract(tmp_path / "out")


def test_extractor_truncated_compressed_data(tmp_path):
    archive = _make_archive(
        tmp_path / "in.zip",
        [(_entry("file.txt", 0o100644), b"some repeated content\n" * 1000)],
    )

    with (
        patch(
            "localfiles.archive.extractor.shutil.copyfileobj",
            side_effect=EOFError(
                "Compressed file ended before the end-of-stream marker was reached"
            ),
        ),
        pytest.raises(LFArchiveError, match="Could not read entry 'file.txt'"),
    ):
        Extractor(archive).extract(tmp_path / "out")


def test_extractor_archive_requiring_zip64(tmp_path):
    archive = _make_archive(tmp_path / "in.zip", [])

    with (
        patch(
            "localfiles.archive.extractor.zipfile.ZipFile",
            side_effect=zipfile.LargeZipFile(
                "Zipfile size would require ZIP64 extensions"
            ),
        ),
        pytest.raises(LFArchiveError, match="Could not read"),
    ):
        Extractor(archive).extract(tmp_path / "out")
