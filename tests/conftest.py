from __future__ import annotations

import io
import zipfile
from typing import Any

import httpx
import pytest

from adapters.github_api import GitHubRestClient
from adapters.http_client import build_client
from core.config import ReleaseSettings
from core.domain.models import ReleaseContext

REPOSITORY = "coder/code-server"
API = "https://api.github.com"


def make_zip(files: dict[str, str]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buf.getvalue()


def make_run(run_id: int, branch: str, created_at: str | None = None, event: str = "pull_request") -> dict[str, Any]:
    run: dict[str, Any] = {
        "id": run_id,
        "head_branch": branch,
        "event": event,
        "status": "completed",
        "artifacts_url": f"{API}/repos/{REPOSITORY}/actions/runs/{run_id}/artifacts",
    }
    if created_at:
        run["created_at"] = created_at
    return run


class FakeGitHub:
    """Minimal in-memory GitHub: workflow runs, artifacts and a blob host."""

    def __init__(self) -> None:
        self.runs: list[dict[str, Any]] = []
        self.artifacts: dict[int, list[dict[str, Any]]] = {}
        self.blobs: dict[str, bytes] = {}
        self.requests: list[httpx.Request] = []

    def add_artifact(self, run_id: int, name: str, content: bytes, artifact_id: int = 11) -> None:
        self.artifacts.setdefault(run_id, []).append(
            {
                "id": artifact_id,
                "name": name,
                "expired": False,
                "size_in_bytes": len(content),
                "archive_download_url": f"{API}/repos/{REPOSITORY}/actions/artifacts/{artifact_id}/zip",
            }
        )
        self.blobs[f"/{artifact_id}.zip"] = content

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.url.host == "blob.example":
            return httpx.Response(200, content=self.blobs[path])

        if path == f"/repos/{REPOSITORY}/actions/workflows/ci.yaml/runs":
            return httpx.Response(200, json={"total_count": len(self.runs), "workflow_runs": self.runs})

        prefix = f"/repos/{REPOSITORY}/actions/runs/"
        if path.startswith(prefix) and path.endswith("/artifacts"):
            run_id = int(path[len(prefix):].split("/")[0])
            items = self.artifacts.get(run_id, [])
            return httpx.Response(200, json={"total_count": len(items), "artifacts": items})

        prefix = f"/repos/{REPOSITORY}/actions/artifacts/"
        if path.startswith(prefix) and path.endswith("/zip"):
            artifact_id = path[len(prefix):].split("/")[0]
            return httpx.Response(302, headers={"Location": f"https://blob.example/{artifact_id}.zip"})

        return httpx.Response(404, json={"message": "Not Found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings() -> ReleaseSettings:
    return ReleaseSettings(
        _env_file=None,
        version="4.0.1",
        github_repository=REPOSITORY,
        github_token="test-token",
        github_api_url=API,
        windir=None,
    )


@pytest.fixture
def context() -> ReleaseContext:
    return ReleaseContext(version="4.0.1", os="linux", arch="amd64")


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def api(settings: ReleaseSettings, fake_github: FakeGitHub) -> GitHubRestClient:
    client = build_client(settings, token=settings.github_token, transport=fake_github.transport)
    with GitHubRestClient(REPOSITORY, settings, client=client) as rest:
        yield rest
