"""Contrato de acceso a la API de GitHub.

Por qué Protocol:
- El resolver de artefactos solo necesita "dame este JSON" y "descarga esta
  URL a este fichero"; no le importa si detrás hay httpx, `gh` o un fake.
- Permite testear la resolución sin red.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class GitHubApi(Protocol):
    """Contrato mínimo para consultar la API REST de GitHub.

    Reglas de diseño:
    - `path` puede ser relativo a la base de la API (`repos/o/r/...`) o una
      URL absoluta devuelta por la propia API (`artifacts_url`).
    - Los errores HTTP se propagan como excepciones del adaptador.
    """

    @property
    def repository(self) -> str:
        """Repositorio `owner/repo` al que apuntan las consultas."""

        ...

    def get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """Hace un GET y devuelve el cuerpo decodificado."""

        ...

    def download(self, url: str, destination: Path) -> Path:
        """Descarga `url` en `destination` y devuelve la ruta escrita."""

        ...
