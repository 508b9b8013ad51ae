"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los scripts de release heredan `VERSION`, `WINDIR` y `RELEASE_PATH` del
  entorno; aquí se leen una sola vez y se pasan de forma explícita.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "release-helpers"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "release-helpers"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "release-helpers"
    return Path.home() / ".config" / "release-helpers"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves con valor `None` se ignoran (no borran lo ya guardado).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# release-helpers user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class ReleaseSettings(BaseSettings):
    """Configuración central de los helpers de release.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Las variables heredadas de los scripts (`VERSION`, `WINDIR`,
      `RELEASE_PATH`, `GITHUB_TOKEN`...) se aceptan sin prefijo mediante alias.
    """

    model_config = SettingsConfigDict(
        env_prefix="RELEASE_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    version: str | None = Field(
        default=None,
        validation_alias="VERSION",
        description="Versión a publicar; si falta se lee de package.json.",
    )
    release_path: Path = Field(
        default=Path("release"),
        validation_alias="RELEASE_PATH",
        description="Directorio destino del release, relativo a la raíz.",
    )
    windir: str | None = Field(
        default=None,
        validation_alias="WINDIR",
        description="Presente solo en Windows; activa junctions en vez de symlinks.",
    )

    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("RELEASE_GITHUB_TOKEN", "GITHUB_TOKEN", "GH_TOKEN"),
        description="Token para la API de GitHub (si falta, se intenta `gh auth token`).",
    )
    github_repository: str | None = Field(
        default=None,
        validation_alias=AliasChoices("RELEASE_GITHUB_REPOSITORY", "GITHUB_REPOSITORY"),
        description="Repositorio `owner/repo`; si falta, se deduce del remote `origin`.",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        min_length=8,
        validation_alias=AliasChoices("RELEASE_GITHUB_API_URL", "GITHUB_API_URL"),
        description="Base URL de la API REST de GitHub.",
    )
    workflow_file: str = Field(
        default="ci.yaml",
        min_length=1,
        description="Workflow de GitHub Actions que produce los artefactos.",
    )

    package_json_path: Path = Field(
        default=Path("package.json"),
        description="Manifest del que se lee la versión del paquete.",
    )
    vscode_package_json_path: Path = Field(
        default=Path("vendor/modules/code-oss-dev/package.json"),
        description="Manifest del editor vendorizado.",
    )

    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos). Las descargas pueden ser grandes.",
    )
    user_agent: str = Field(
        default="release-helpers/0.1",
        min_length=1,
        description="User-Agent para peticiones a GitHub.",
    )
