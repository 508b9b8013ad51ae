"""CLI principal (Typer).

Pensada para llamarse desde los scripts de release:
- los valores (versiones, URLs, `export ...`) salen por stdout, limpios para
  `$(...)` o `eval`;
- el progreso y los diagnósticos van por stderr;
- un `ReleaseError` termina con `ERROR: ...` y exit 1.
"""

from __future__ import annotations

import shlex
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from adapters.filesystem import symlink_asar as link_asar
from adapters.github_api import GitHubRestClient
from adapters.platform_probe import SystemLibcProbe
from cli import doctor
from cli.ui_components import configure_logging
from core.config import ReleaseSettings
from core.domain.environment import Environment
from core.domain.models import ReleaseContext
from core.errors import ManifestError, ReleaseError
from core.package_manifest import read_package_version, read_vscode_version
from core.services.artifact_resolver import ArtifactResolver
from core.services.release_context import build_release_context

app = typer.Typer(
    no_args_is_help=True,
    help="Release helpers: versions, platform labels and CI workflow artifacts.",
)
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)


def _build_context(settings: ReleaseSettings) -> ReleaseContext:
    return build_release_context(settings, probe=SystemLibcProbe())


def _open_api(settings: ReleaseSettings) -> GitHubRestClient:
    return GitHubRestClient.from_settings(settings)


def _fail(exc: ReleaseError) -> typer.Exit:
    _err_console.print(f"[bold red]ERROR:[/bold red] {escape(str(exc))}", markup=True, highlight=False)
    return typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    configure_logging(_err_console, verbose=verbose)


@app.command()
def version(
    vscode: bool = typer.Option(False, "--vscode", help="Print the vendored editor version instead."),
) -> None:
    """Print the version field of package.json."""

    settings = ReleaseSettings()
    try:
        if vscode:
            value = read_vscode_version(settings.vscode_package_json_path)
        else:
            value = read_package_version(settings.package_json_path)
    except ReleaseError as exc:
        raise _fail(exc) from exc
    typer.echo(value)


@app.command(name="os")
def os_name() -> None:
    """Print the OS label used in artifact names (linux, alpine, macos...)."""

    typer.echo(_build_context(ReleaseSettings()).os)


@app.command()
def arch() -> None:
    """Print the CPU architecture label (amd64, arm64...)."""

    typer.echo(_build_context(ReleaseSettings()).arch)


@app.command()
def env() -> None:
    """Print `export` lines for VERSION, ARCH, OS and RELEASE_PATH.

    Usage: eval "$(release-helpers env)"
    """

    settings = ReleaseSettings()
    context = _build_context(settings)
    if not context.version:
        raise _fail(ManifestError(f"VERSION is not set and {settings.package_json_path} has no version"))
    values = {
        "VERSION": context.version,
        "ARCH": context.arch,
        "OS": context.os,
        "RELEASE_PATH": str(context.release_path),
    }
    for key, value in values.items():
        typer.echo(f"export {key}={shlex.quote(value)}")


@app.command(name="artifacts-url")
def artifacts_url(
    environment: str = typer.Argument("production", help="production | staging | development"),
    branch: str = typer.Argument(None, help="Branch name (only used for development)."),
) -> None:
    """Print the artifacts collection URL of the latest matching ci.yaml run."""

    settings = ReleaseSettings()
    context = _build_context(settings)
    try:
        with _open_api(settings) as api:
            resolver = ArtifactResolver(api, context, workflow_file=settings.workflow_file)
            url = resolver.resolve_artifacts_url(environment, branch)
    except ReleaseError as exc:
        raise _fail(exc) from exc
    typer.echo(url)


@app.command(name="artifact-url")
def artifact_url(
    name: str = typer.Argument(..., help="Artifact name, i.e. npm-package."),
    environment: str = typer.Argument("production", help="production | staging | development"),
    branch: str = typer.Argument(None, help="Branch name (only used for development)."),
) -> None:
    """Print the download URL of an artifact of the latest matching run."""

    settings = ReleaseSettings()
    context = _build_context(settings)
    try:
        with _open_api(settings) as api:
            resolver = ArtifactResolver(api, context, workflow_file=settings.workflow_file)
            url = resolver.resolve_artifact_download_url(name, environment, branch)
    except ReleaseError as exc:
        raise _fail(exc) from exc
    if not url:
        _err_console.print(f"No artifact named {name!r} in the matching run", highlight=False)
        raise typer.Exit(code=1)
    typer.echo(url)


@app.command(name="download-artifact")
def download_artifact(
    name: str = typer.Argument(..., help="Artifact name, i.e. npm-package."),
    destination: Path = typer.Argument(..., help="Directory to unzip the artifact into."),
    environment: str = typer.Argument("production", help="production | staging | development"),
    branch: str = typer.Argument(None, help="Branch to search (defaults to v$VERSION)."),
) -> None:
    """Download an artifact of the latest matching run and unzip it."""

    settings = ReleaseSettings()
    context = _build_context(settings)
    try:
        with _open_api(settings) as api:
            resolver = ArtifactResolver(api, context, workflow_file=settings.workflow_file)
            resolver.download_artifact(name, destination, Environment.parse(environment), branch)
    except ReleaseError as exc:
        raise _fail(exc) from exc


@app.command(name="symlink-asar")
def symlink_asar(
    root: Path = typer.Option(Path("."), "--root", help="Directory containing node_modules."),
) -> None:
    """Link node_modules.asar to node_modules (junction on Windows)."""

    settings = ReleaseSettings()
    link_asar(root, windows=bool(settings.windir))


def run() -> None:
    app()
