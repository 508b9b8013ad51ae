"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Las respuestas de la API de GitHub se validan en el borde y el resto del
  código trabaja con atributos tipados, no con dicts.
- `extra="ignore"`: la API devuelve decenas de campos que no usamos.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class RunTarget(BaseModel):
    """Rama y evento que identifican el workflow run buscado."""

    model_config = ConfigDict(frozen=True)

    branch: str = Field(
        ...,
        min_length=1,
        description="Rama (`head_branch`) del run.",
    )
    event: str = Field(
        ...,
        min_length=1,
        description="Evento que disparó el run (`pull_request`, `push`).",
    )


class WorkflowRun(BaseModel):
    """Una ejecución de `ci.yaml` (solo los campos que necesitamos)."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = Field(
        default=None,
        description="Identificador del run.",
    )
    head_branch: str | None = Field(
        default=None,
        description="Rama que disparó el run.",
    )
    event: str | None = Field(
        default=None,
        description="Evento que disparó el run.",
    )
    artifacts_url: str | None = Field(
        default=None,
        description="URL de la colección de artefactos del run.",
    )
    created_at: datetime | None = Field(
        default=None,
        description="Momento de creación del run (UTC).",
    )


class WorkflowRunsPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_count: int = 0
    workflow_runs: list[WorkflowRun] = Field(default_factory=list)


class Artifact(BaseModel):
    """Archivo ZIP con nombre producido por un workflow run."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = Field(
        default=None,
        description="Identificador del artefacto.",
    )
    name: str = Field(
        ...,
        description="Nombre del artefacto (p.ej. 'npm-package').",
    )
    archive_download_url: str | None = Field(
        default=None,
        description="URL de descarga del ZIP (redirige al blob storage).",
    )
    expired: bool = Field(
        default=False,
        description="GitHub borra los artefactos pasado el periodo de retención.",
    )
    size_in_bytes: int | None = Field(
        default=None,
        description="Tamaño del ZIP.",
    )


class ArtifactsPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_count: int = 0
    artifacts: list[Artifact] = Field(default_factory=list)


class PackageManifest(BaseModel):
    """Subconjunto de `package.json` que nos interesa."""

    model_config = ConfigDict(extra="ignore")

    version: str = Field(
        ...,
        min_length=1,
        description="Campo `version` del manifest.",
    )


class ReleaseContext(BaseModel):
    """Metadatos del release calculados una sola vez al arrancar.

    Por qué un modelo y no variables globales:
    - Los valores (`VERSION`, `ARCH`, `OS`...) se pasan explícitamente a los
      servicios, lo que permite construirlos a mano en tests.
    """

    model_config = ConfigDict(frozen=True)

    version: str | None = Field(
        default=None,
        description="Versión del paquete (sin `v`).",
    )
    vscode_version: str | None = Field(
        default=None,
        description="Versión del editor vendorizado, si existe el manifest.",
    )
    os: str = Field(
        ...,
        min_length=1,
        description="SO normalizado (`linux`, `alpine`, `macos`...).",
    )
    arch: str = Field(
        ...,
        min_length=1,
        description="Arquitectura normalizada (`amd64`, `arm64`...).",
    )
    release_path: Path = Field(
        default=Path("release"),
        description="Directorio destino del release.",
    )
    windows: bool = Field(
        default=False,
        description="True si `WINDIR` está definido.",
    )

    @property
    def release_branch(self) -> str | None:
        """Rama de release por convención: `v<VERSION>`."""

        return f"v{self.version}" if self.version else None
