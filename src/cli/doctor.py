"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.gh_cli import detect_repository, parse_github_remote, read_gh_token
from adapters.http_client import build_client
from adapters.platform_probe import SystemLibcProbe
from cli.ui_components import build_context_table, print_banner
from core.config import ReleaseSettings, write_user_env_vars
from core.services.release_context import build_release_context

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console(stderr=True)


def _check_http(settings: ReleaseSettings, token: str | None) -> tuple[bool, str]:
    try:
        with build_client(settings, token=token) as client:
            response = client.get("rate_limit")
        if response.status_code != 200:
            return False, f"HTTP {response.status_code}"
        remaining = response.json().get("rate", {}).get("remaining")
        return True, f"HTTP 200 (rate limit remaining: {remaining})"
    except httpx.HTTPError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ReleaseSettings()
    print_banner(_console)

    table = Table(title="release-helpers doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # GitHub
    token = settings.github_token or read_gh_token()
    if settings.github_token:
        table.add_row("GitHub token", "OK", "From environment / .env")
    elif token:
        table.add_row("GitHub token", "OK", "From `gh auth token`")
    else:
        table.add_row("GitHub token", "MISSING", "Set GITHUB_TOKEN or run `gh auth login`")

    repository = settings.github_repository or detect_repository()
    if repository:
        table.add_row("Repository", "OK", repository)
    else:
        table.add_row("Repository", "MISSING", "Set GITHUB_REPOSITORY=owner/repo")
    table.add_row("Workflow", "OK", settings.workflow_file)

    # Release metadata
    context = build_release_context(settings, probe=SystemLibcProbe())
    if context.version:
        table.add_row("VERSION", "OK", context.version)
    else:
        table.add_row("VERSION", "MISSING", f"Set VERSION or add {settings.package_json_path}")

    # Connectivity (best-effort)
    ok_http, detail_http = _check_http(settings, token)
    table.add_row("GitHub API", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)
    _console.print(build_context_table(context))

    if not token:
        _console.print(
            "\n[yellow]Note:[/yellow] Listing runs works anonymously on public repos, "
            "but downloading artifacts always requires a token."
        )


@app.command(name="setup-github")
def setup_github() -> None:
    """Interactive GitHub setup (stores config in the user config .env)."""

    default_repo = detect_repository() or ""
    repository = typer.prompt("Repository (owner/repo)", default=default_repo, show_default=True).strip()
    if not parse_github_remote(f"github.com/{repository}"):
        raise typer.BadParameter("repository must look like owner/repo")

    token = typer.prompt(
        "GitHub token (leave empty to use `gh auth token`)",
        default="",
        show_default=False,
        hide_input=True,
    ).strip()

    env_path = write_user_env_vars(
        {
            "RELEASE_GITHUB_REPOSITORY": repository,
            "RELEASE_GITHUB_TOKEN": token or None,
        }
    )

    _console.print(f"[green]Saved GitHub config to:[/green] {env_path}")
