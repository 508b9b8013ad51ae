"""Lectura de versiones desde manifests `package.json`.

Este módulo vive en `core/` porque:
- centraliza *qué* manifest define la versión del release sin acoplarse a la CLI
- evita que cada comando repita la lógica de paths/validación.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from core.domain.models import PackageManifest
from core.errors import ManifestError


def load_package_manifest(path: Path) -> PackageManifest:
    """Carga y valida un `package.json`.

    Errores:
    - `ManifestError` si el fichero no existe, no es JSON o no tiene `version`.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ManifestError(f"{path} does not exist") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"{path} is not valid JSON: {exc}") from exc

    try:
        return PackageManifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestError(f"{path} has no usable version field") from exc


def read_package_version(path: Path = Path("package.json")) -> str:
    return load_package_manifest(path).version


def read_vscode_version(
    path: Path = Path("vendor/modules/code-oss-dev/package.json"),
) -> str:
    return load_package_manifest(path).version
