"""Resolución de artefactos de los workflows de release.

Los scripts de release no compilan nada: recogen los artefactos que ya
produjo el workflow `ci.yaml`. Este módulo localiza el workflow run correcto
para un entorno, busca dentro un artefacto por nombre y descarga/extrae el
ZIP.

Cada paso devuelve un valor utilizable o aborta con `ResolutionError`;
no hay reintentos ni resultados parciales.
"""

from __future__ import annotations

import logging
import os
import tempfile
import zipfile
from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import urlencode

from core.domain.environment import Environment
from core.domain.models import ArtifactsPage, ReleaseContext, RunTarget, WorkflowRun, WorkflowRunsPage
from core.errors import ResolutionError
from core.interfaces.github import GitHubApi

logger = logging.getLogger(__name__)

_UNDATED = datetime.min.replace(tzinfo=timezone.utc)

# `create_system` de los ZIP creados en Unix.
_ZIP_UNIX = 3


def select_run_target(
    environment: Environment | str | None,
    branch: str | None,
    version: str | None,
) -> RunTarget:
    """Deriva `(branch, event)` para un entorno.

    - production: `v<VERSION>` / `pull_request` (se ignora `branch`)
    - staging: `main` / `push`
    - development: la rama recibida / `pull_request`
    - cualquier otro valor se comporta como production
    """

    env = Environment.parse(environment)

    if env is Environment.STAGING:
        return RunTarget(branch="main", event="push")

    if env is Environment.DEVELOPMENT:
        if not branch:
            raise ResolutionError("A branch name is required for the development environment")
        return RunTarget(branch=branch, event="pull_request")

    # Los releases salen de una rama con el nombre de la versión, p.ej. `v4.0.1`.
    if not version:
        raise ResolutionError(
            "VERSION is not set: cannot derive the release branch (v<VERSION>) "
            "for the production environment"
        )
    return RunTarget(branch=f"v{version}", event="pull_request")


def _run_sort_key(run: WorkflowRun) -> datetime:
    created_at = run.created_at
    if created_at is None:
        return _UNDATED
    if created_at.tzinfo is None:
        # Algunos proxies de GitHub Enterprise omiten la `Z`.
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


def latest_matching_run(runs: list[WorkflowRun], branch: str) -> WorkflowRun | None:
    """Run más reciente cuyo `head_branch` es exactamente `branch`.

    Se ordena por `created_at` (más nuevo primero) en vez de fiarse del orden
    de la API; los runs sin fecha van al final conservando su orden.
    """

    matching = [run for run in runs if run.head_branch == branch]
    matching.sort(key=_run_sort_key, reverse=True)
    return matching[0] if matching else None


def extract_archive(archive: Path, destination: Path) -> None:
    """Extrae un ZIP sobrescribiendo y conservando los permisos Unix.

    `ZipFile.extractall` descarta los bits de modo; `unzip` los respeta y los
    paquetes de release contienen ejecutables.
    """

    destination.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            target = zf.extract(info, destination)
            mode = (info.external_attr >> 16) & 0o777
            if info.create_system == _ZIP_UNIX and mode and not info.is_dir():
                os.chmod(target, mode)


class ArtifactResolver:
    """Localiza y descarga artefactos de workflow para un release."""

    def __init__(
        self,
        api: GitHubApi,
        context: ReleaseContext,
        *,
        workflow_file: str = "ci.yaml",
    ) -> None:
        self._api = api
        self._context = context
        self._workflow_file = workflow_file

    def workflow_runs_path(self, target: RunTarget) -> str:
        query = urlencode({"event": target.event, "branch": target.branch})
        return (
            f"repos/{self._api.repository}/actions/workflows/"
            f"{self._workflow_file}/runs?{query}"
        )

    def resolve_artifacts_url(
        self,
        environment: Environment | str | None = Environment.PRODUCTION,
        branch: str | None = None,
    ) -> str:
        """URL de la colección de artefactos del último run que encaja.

        Toma el run de `ci.yaml` más reciente para la rama y evento del
        entorno, haya terminado bien o mal.
        """

        target = select_run_target(environment, branch, self._context.version)
        runs_path = self.workflow_runs_path(target)

        payload = self._api.get_json(runs_path)
        page = WorkflowRunsPage.model_validate(payload)
        run = latest_matching_run(page.workflow_runs, target.branch)
        artifacts_url = run.artifacts_url if run else None

        if not artifacts_url:
            raise ResolutionError(
                "artifacts_url came back empty\n"
                f"We looked for a run triggered by a {target.event} event for version: "
                f"{self._context.version} and a branch named {target.branch}\n"
                f"URL used for GitHub API call: {runs_path}"
            )

        logger.info("Using this artifacts url: %s", artifacts_url)
        return artifacts_url

    def resolve_artifact_download_url(
        self,
        name: str,
        environment: Environment | str | None = Environment.PRODUCTION,
        branch: str | None = None,
    ) -> str | None:
        """URL de descarga del artefacto `name`, o None si no está."""

        artifacts_url = self.resolve_artifacts_url(environment, branch)
        page = ArtifactsPage.model_validate(self._api.get_json(artifacts_url))
        for artifact in page.artifacts:
            if artifact.name == name and artifact.archive_download_url:
                if artifact.expired:
                    logger.warning("Artifact %s is marked as expired", name)
                return artifact.archive_download_url
        return None

    def download_artifact(
        self,
        name: str,
        destination: Path,
        environment: Environment | str | None = Environment.PRODUCTION,
        branch: str | None = None,
    ) -> Path:
        """Descarga el artefacto `name` y lo descomprime en `destination`.

        Los ficheros existentes se sobrescriben. El ZIP vive en un directorio
        temporal que se borra tanto si la extracción funciona como si no.
        """

        branch = branch or self._context.release_branch
        download_url = self.resolve_artifact_download_url(name, environment, branch)

        logger.info("Downloading artifact with the following values:")
        logger.info("-artifact_name: %s", name)
        logger.info("-dst: %s", destination)
        logger.info("-environment: %s", Environment.parse(environment).value)
        logger.info("-branch: %s", branch)
        logger.info("-artifact_url: %s", download_url)

        if not download_url:
            raise ResolutionError(
                f"No artifact named {name!r} was found for version: "
                f"{self._context.version} and branch {branch}"
            )

        with tempfile.TemporaryDirectory(prefix="release-artifact-") as tmp_dir:
            archive = self._api.download(download_url, Path(tmp_dir) / f"{name}.zip")
            extract_archive(archive, destination)

        return destination
