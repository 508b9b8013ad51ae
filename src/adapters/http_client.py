"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y autenticación contra la API de GitHub.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import ReleaseSettings

GITHUB_API_VERSION = "2022-11-28"


def build_client(
    settings: ReleaseSettings | None = None,
    *,
    token: str | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` apuntando a la API de GitHub.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - `follow_redirects=True`: las descargas de artefactos redirigen al blob
      storage (httpx no reenvía `Authorization` a otro host).
    """

    settings = settings or ReleaseSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if extra_headers:
        headers.update(extra_headers)

    base_url = settings.github_api_url.rstrip("/") + "/"
    return httpx.Client(
        base_url=base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
