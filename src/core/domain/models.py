"""Modelos del dominio (Pydantic v2).

Estos modelos describen *qué* se crea (release, template, proyecto), no
*cómo* se descarga o extrae.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path
from typing import Generic, TypeVar, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

T = TypeVar("T")


def normalize_tag(version: str) -> str:
    """`1.2.3` -> `v1.2.3`; `v1.2.3` se deja igual."""

    tag = version.strip()
    if not tag:
        raise ValueError("version must not be empty")
    return tag if tag.startswith("v") else f"v{tag}"


class ExitCode(IntEnum):
    SUCCESS = 0
    FAILURE = 1


class VersionMode(str, Enum):
    LATEST = "latest"
    PRERELEASE = "prerelease"
    PINNED = "pinned"


class VersionSelection(BaseModel):
    """Modo de selección de versión (latest / pre-release / pinned)."""

    model_config = ConfigDict(frozen=True)

    mode: VersionMode = Field(default=VersionMode.LATEST)
    tag: str | None = Field(
        default=None,
        description="Tag normalizado; solo presente en modo pinned.",
    )

    @model_validator(mode="after")
    def _check_tag(self) -> "VersionSelection":
        if self.mode is VersionMode.PINNED and not self.tag:
            raise ValueError("pinned mode requires a tag")
        if self.mode is not VersionMode.PINNED and self.tag is not None:
            raise ValueError(f"{self.mode.value} mode does not take a tag")
        return self

    @classmethod
    def latest(cls) -> "VersionSelection":
        return cls(mode=VersionMode.LATEST)

    @classmethod
    def prerelease(cls) -> "VersionSelection":
        return cls(mode=VersionMode.PRERELEASE)

    @classmethod
    def pinned(cls, version: str) -> "VersionSelection":
        return cls(mode=VersionMode.PINNED, tag=normalize_tag(version))


class ReleaseDescriptor(BaseModel):
    """Release resuelta; inmutable una vez creada.

    Acepta tanto los nombres del dominio como las claves de la API de GitHub
    (`tag_name`, `name`, `published_at`, `html_url`).
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    tag: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("tag", "tag_name"),
        description="Identificador inmutable de la release (p.ej. 'v3.0.0').",
    )
    display_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("display_name", "name"),
        description="Nombre legible de la release.",
    )
    published_at: datetime | None = Field(
        default=None,
        description="Momento de publicación (ausente en versiones pinned).",
    )
    url: str = Field(
        default="",
        validation_alias=AliasChoices("html_url", "url"),
        description="Página web de la release.",
    )

    @model_validator(mode="after")
    def _default_display_name(self) -> "ReleaseDescriptor":
        if not self.display_name:
            object.__setattr__(self, "display_name", self.tag)
        return self


class TemplateSelection(BaseModel):
    """Template conocido: clave visible para el usuario + origen remoto."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Clave del template (p.ej. 'standard').")
    remote_locator: str = Field(..., min_length=1, description="Origen remoto del starter.")

    @property
    def title(self) -> str:
        return self.name[:1].upper() + self.name[1:]


class ProjectRequest(BaseModel):
    """Petición de creación; se construye una vez y no se muta."""

    model_config = ConfigDict(frozen=True)

    target_name: str = Field(..., min_length=1, description="Nombre tal cual lo escribió el usuario.")
    target_path: Path = Field(..., description="Ruta absoluta del directorio destino.")
    force: bool = Field(default=False, description="Permite sobrescribir un directorio existente.")
    template: TemplateSelection
    version: VersionSelection = Field(default_factory=VersionSelection.latest)

    @field_validator("target_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("project name is required")
        return value

    @field_validator("target_path")
    @classmethod
    def _require_absolute(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError("target_path must be absolute")
        return value

    @classmethod
    def build(
        cls,
        target_name: str,
        *,
        template: TemplateSelection,
        force: bool = False,
        version: VersionSelection | None = None,
        cwd: Path | None = None,
    ) -> "ProjectRequest":
        name = target_name.strip()
        base = (cwd or Path.cwd()).resolve()
        return cls(
            target_name=name,
            target_path=(base / name).resolve(),
            force=force,
            template=template,
            version=version or VersionSelection.latest(),
        )


class TransferPhase(str, Enum):
    DOWNLOADING = "downloading"
    DOWNLOADED = "downloaded"
    EXTRACTING = "extraction_in_progress"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class TransferState:
    """Estado efímero del archivo descargado durante una ejecución."""

    archive_path: Path | None = None
    phase: TransferPhase = TransferPhase.DOWNLOADING

    def advance(self, phase: TransferPhase) -> None:
        if self.phase in (TransferPhase.COMPLETE, TransferPhase.FAILED):
            raise RuntimeError(f"transfer already finished ({self.phase.value})")
        self.phase = phase

    def discard(self) -> None:
        """Borra el archivo temporal (si existe) y marca el fallo."""

        if self.archive_path is not None:
            self.archive_path.unlink(missing_ok=True)
        self.phase = TransferPhase.FAILED


@dataclass(frozen=True)
class Completed(Generic[T]):
    value: T


@dataclass(frozen=True)
class Cancelled:
    pass


PromptResult = Union[Completed[T], Cancelled]
