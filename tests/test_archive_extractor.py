from __future__ import annotations

import io
import random
import tarfile
from pathlib import Path

import pytest

from adapters.archive_extractor import TarballExtractor
from conftest import STARTER_FILES, write_tarball
from core.domain.errors import ExtractionError


def test_extracts_all_entries(tmp_path: Path) -> None:
    archive = write_tarball(tmp_path / "starter.tar.gz", STARTER_FILES)
    target = tmp_path / "nested" / "my-app"

    TarballExtractor().extract(archive, target)

    assert (target / "package.json").read_text() == STARTER_FILES["package.json"]
    assert (target / "src" / "worker.tsx").read_text() == STARTER_FILES["src/worker.tsx"]


def test_overwrites_files_in_existing_directory(tmp_path: Path) -> None:
    archive = write_tarball(tmp_path / "starter.tar.gz", STARTER_FILES)
    target = tmp_path / "my-app"
    target.mkdir()
    (target / "package.json").write_text("old")
    (target / "keep.txt").write_text("untouched")

    TarballExtractor().extract(archive, target)

    assert (target / "package.json").read_text() == STARTER_FILES["package.json"]
    assert (target / "keep.txt").read_text() == "untouched"


def test_malformed_archive_leaves_no_directory(tmp_path: Path) -> None:
    archive = tmp_path / "broken.tar.gz"
    archive.write_bytes(b"this is not a tarball")
    target = tmp_path / "my-app"

    with pytest.raises(ExtractionError):
        TarballExtractor().extract(archive, target)

    assert not target.exists()


def test_corrupt_xz_stream_is_extraction_error(tmp_path: Path) -> None:
    payload = random.Random(0).randbytes(32 * 1024)
    archive = tmp_path / "starter.tar.xz"
    with tarfile.open(archive, mode="w:xz") as tar:
        info = tarfile.TarInfo("package.json")
        info.size = len(payload)
        tar.addfile(info, io.BytesIO(payload))
    data = bytearray(archive.read_bytes())
    middle = len(data) // 2
    for offset in range(middle, middle + 64):
        data[offset] ^= 0xFF
    archive.write_bytes(bytes(data))

    with pytest.raises(ExtractionError, match="Failed to decompress template"):
        TarballExtractor().extract(archive, tmp_path / "my-app")


def test_missing_archive(tmp_path: Path) -> None:
    with pytest.raises(ExtractionError):
        TarballExtractor().extract(tmp_path / "absent.tar.gz", tmp_path / "my-app")


def test_rejects_entries_outside_target(tmp_path: Path) -> None:
    archive = tmp_path / "evil.tar.gz"
    with tarfile.open(archive, mode="w:gz") as tar:
        data = b"owned"
        info = tarfile.TarInfo("../escape.txt")
        info.size = len(data)
        tar.addfile(info, io.BytesIO(data))
    target = tmp_path / "my-app"

    with pytest.raises(ExtractionError):
        TarballExtractor().extract(archive, target)

    assert not (tmp_path / "escape.txt").exists()
