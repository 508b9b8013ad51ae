"""Cliente REST de GitHub (implementa `core.interfaces.github.GitHubApi`).

Por qué no `gh api`:
- Con httpx tenemos timeouts, streaming de descargas y errores tipados sin
  depender de un binario externo. `gh` solo se usa (opcionalmente) para
  obtener el token y el repositorio, ver `adapters.gh_cli`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType
from typing import Any

import httpx

from adapters.gh_cli import detect_repository, read_gh_token
from adapters.http_client import build_client
from core.config import ReleaseSettings
from core.errors import RepositoryNotFoundError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 64


class GitHubRestClient:
    """Consultas JSON y descargas contra `api.github.com`."""

    def __init__(
        self,
        repository: str,
        settings: ReleaseSettings | None = None,
        *,
        token: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._repository = repository
        self._settings = settings or ReleaseSettings()
        self._client = client or build_client(self._settings, token=token)

    @classmethod
    def from_settings(
        cls,
        settings: ReleaseSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> "GitHubRestClient":
        """Construye el cliente resolviendo repo y token como lo haría `gh`.

        Orden:
        1) valores de `ReleaseSettings` (env/.env)
        2) remote `origin` del repo git actual / `gh auth token`
        """

        repository = settings.github_repository or detect_repository()
        if not repository:
            raise RepositoryNotFoundError(
                "Could not determine the GitHub repository: set GITHUB_REPOSITORY "
                "(owner/repo) or run inside a clone with a GitHub origin remote"
            )

        token = settings.github_token or read_gh_token()
        if not token:
            logger.warning("No GitHub token found; artifact downloads require authentication")

        client = build_client(settings, token=token, transport=transport)
        return cls(repository, settings, client=client)

    @property
    def repository(self) -> str:
        return self._repository

    def get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        logger.debug("GET %s %s", path, params or "")
        resp = self._client.get(path, params=params)
        resp.raise_for_status()
        return resp.json()

    def download(self, url: str, destination: Path) -> Path:
        logger.debug("Downloading %s -> %s", url, destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        with self._client.stream("GET", url) as resp:
            resp.raise_for_status()
            with destination.open("wb") as fh:
                for chunk in resp.iter_bytes(_CHUNK_SIZE):
                    fh.write(chunk)
        return destination

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GitHubRestClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
