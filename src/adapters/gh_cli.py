"""Descubrimiento de repositorio y token (estilo `gh`).

`gh api repos/:owner/:repo/...` rellena `:owner/:repo` a partir del remote
git y usa el token guardado por `gh auth login`. Aquí replicamos ambas
cosas para cuando no vienen en la configuración.

Ambas funciones son best-effort: devuelven `None` si el binario no existe o
el comando falla.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

# https://github.com/owner/repo(.git) | git@github.com:owner/repo(.git) | ssh://git@github.com/owner/repo
_REMOTE_RE = re.compile(
    r"github\.com[:/](?P<owner>[\w.-]+)/(?P<repo>[\w.-]+?)(?:\.git)?/?$"
)


def parse_github_remote(url: str) -> str | None:
    """Extrae `owner/repo` de una URL de remote de GitHub."""

    match = _REMOTE_RE.search(url.strip())
    if not match:
        return None
    return f"{match.group('owner')}/{match.group('repo')}"


def _run(args: list[str], cwd: Path | None = None) -> str | None:
    try:
        completed = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
            timeout=15,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("%s failed: %s", " ".join(args), exc)
        return None
    out = completed.stdout.strip()
    return out or None


def detect_repository(cwd: Path | None = None, remote: str = "origin") -> str | None:
    url = _run(["git", "remote", "get-url", remote], cwd=cwd)
    if not url:
        return None
    repository = parse_github_remote(url)
    if repository:
        logger.debug("Using repository %s from remote %s", repository, remote)
    return repository


def read_gh_token() -> str | None:
    return _run(["gh", "auth", "token"])
