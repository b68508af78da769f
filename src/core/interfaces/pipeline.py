"""Contratos de las etapas del pipeline (resolver -> fetch -> extract)."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from core.domain.models import ReleaseDescriptor, VersionSelection


@runtime_checkable
class ReleaseResolver(Protocol):
    """Convierte un modo de selección en una release concreta.

    Lanza `ReleaseLookupError` (o `NoPreReleaseFoundError`).
    """

    async def resolve(self, selection: VersionSelection) -> ReleaseDescriptor:
        ...


@runtime_checkable
class ArchiveFetcher(Protocol):
    """Descarga el archivo del template a un path local.

    Lanza `DownloadError` o `TransferError`.
    """

    async def fetch(self, release: ReleaseDescriptor, template_name: str) -> Path:
        ...


@runtime_checkable
class ArchiveExtractor(Protocol):
    """Extrae un archivo local en `target_dir`. Lanza `ExtractionError`."""

    def extract(self, archive_path: Path, target_dir: Path) -> None:
        ...
