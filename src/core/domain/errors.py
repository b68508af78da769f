"""Errores del dominio.

Todos son terminales para la ejecución: el inicializador los captura, los
reporta (con `details` si existe) y devuelve `ExitCode.FAILURE`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable


class CreateProjectError(Exception):
    """Base de los fallos de creación de proyecto."""

    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidTemplateError(CreateProjectError):
    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available = tuple(available)
        super().__init__(
            f"Invalid template '{name}'. Available templates: {', '.join(self.available)}"
        )


class DirectoryExistsError(CreateProjectError):
    def __init__(self, target_name: str, target_path: Path) -> None:
        self.target_path = target_path
        super().__init__(f"Directory {target_name} already exists. Use --force to overwrite.")


class ReleaseLookupError(CreateProjectError):
    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code


class NoPreReleaseFoundError(ReleaseLookupError):
    def __init__(self, skipped: int = 0) -> None:
        self.skipped = skipped
        super().__init__(f"No pre-release found ({skipped} test release(s) skipped).")


class DownloadError(CreateProjectError):
    def __init__(self, status_code: int, message: str, *, details: Any | None = None) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code


class TransferError(CreateProjectError):
    """Fallo de red o de escritura a mitad de la descarga."""


class ExtractionError(CreateProjectError):
    """Archivo corrupto, formato no soportado o fallo del filesystem."""
