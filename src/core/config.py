"""Configuración del Core.

- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los adaptadores (GitHub API, descarga, temp files) leen de aquí.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Todas las claves aceptan el prefijo `CREATE_RWSDK_`; el token de GitHub
    también se lee de `GITHUB_TOKEN` / `GH_TOKEN`.
    """

    model_config = SettingsConfigDict(
        env_prefix="CREATE_RWSDK_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="https://api.github.com",
        min_length=8,
        description="Base URL de la API de releases.",
    )
    download_base_url: str = Field(
        default="https://github.com",
        min_length=8,
        description="Host que sirve los assets de cada release.",
    )
    release_repo: str = Field(
        default="redwoodjs/sdk",
        pattern=r"^[^/\s]+/[^/\s]+$",
        description="Repositorio `owner/name` que publica los starters.",
    )
    user_agent: str = Field(
        default="create-rwsdk",
        min_length=1,
        description="User-Agent (la API de GitHub lo exige).",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None = sin timeout.",
    )
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CREATE_RWSDK_GITHUB_TOKEN", "GITHUB_TOKEN", "GH_TOKEN"),
        description="Bearer token opcional para subir el rate limit.",
    )
    temp_dir: Path | None = Field(
        default=None,
        description="Directorio para el archivo descargado (default: temp del sistema).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging cuando no se pasa --verbose.",
    )

    @property
    def download_dir(self) -> Path:
        return self.temp_dir or Path(tempfile.gettempdir())

    @property
    def archive_prefix(self) -> str:
        """`redwoodjs/sdk` -> `redwoodjs-sdk` (prefijo del archivo temporal)."""

        return self.release_repo.replace("/", "-")

    @property
    def token(self) -> str | None:
        value = (self.github_token or "").strip()
        return value or None
