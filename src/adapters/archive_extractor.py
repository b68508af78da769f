"""Extracción del archivo descargado en el directorio del proyecto."""

from __future__ import annotations

import logging
import lzma
import tarfile
import zlib
from pathlib import Path

from core.domain.errors import ExtractionError
from core.interfaces.pipeline import ArchiveExtractor

logger = logging.getLogger(__name__)


class TarballExtractor(ArchiveExtractor):
    """Extrae tarballs (`.tar`, `.tar.gz`, `.tar.bz2`, `.tar.xz`).

    El archivo se abre antes de crear `target_dir`: un archivo ilegible no
    deja un directorio vacío. Lo que ya se haya escrito si falla a mitad de
    extracción no se deshace.
    """

    def extract(self, archive_path: Path, target_dir: Path) -> None:
        try:
            with tarfile.open(archive_path, mode="r:*") as archive:
                members = archive.getmembers()
                target_dir.mkdir(parents=True, exist_ok=True)
                archive.extractall(target_dir, members=members, filter="data")
        except (tarfile.TarError, zlib.error, lzma.LZMAError, EOFError, OSError) as exc:
            raise ExtractionError(f"Failed to decompress template: {exc}") from exc

        logger.debug("Extracted %d entries into %s", len(members), target_dir)
