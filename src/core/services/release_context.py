"""Construcción del `ReleaseContext`.

Sustituye a las variables globales que calculaban los scripts al cargarse
(`VERSION`, `ARCH`, `OS`): se calculan aquí una vez y se pasan a quien las
necesite.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path
from typing import Callable

from core.config import ReleaseSettings
from core.domain.models import ReleaseContext
from core.domain.platform import LibC, normalize_arch, normalize_os
from core.errors import ManifestError
from core.interfaces.platform import LibcProbe
from core.package_manifest import read_package_version, read_vscode_version

logger = logging.getLogger(__name__)


def _optional_version(reader: Callable[[Path], str], path: Path) -> str | None:
    if not path.exists():
        return None
    try:
        return reader(path)
    except ManifestError as exc:
        logger.warning("Ignoring %s: %s", path, exc)
        return None


def build_release_context(
    settings: ReleaseSettings,
    *,
    probe: LibcProbe,
    machine: str | None = None,
    system: str | None = None,
) -> ReleaseContext:
    """Calcula los metadatos del release.

    Reglas:
    - `VERSION` del entorno gana; si no, se lee `package.json` (si existe).
    - La libc solo se consulta en Linux.
    - `machine`/`system` permiten fijar la plataforma en tests.
    - `probe` se inyecta (la CLI usa `SystemLibcProbe`).
    """

    version = settings.version or _optional_version(read_package_version, settings.package_json_path)
    vscode_version = _optional_version(read_vscode_version, settings.vscode_package_json_path)

    system = system if system is not None else platform.system()
    machine = machine if machine is not None else platform.machine()

    libc = LibC.UNKNOWN
    if system.lower() == "linux":
        libc = probe.detect()

    context = ReleaseContext(
        version=version,
        vscode_version=vscode_version,
        os=normalize_os(system, libc),
        arch=normalize_arch(machine),
        release_path=settings.release_path,
        windows=bool(settings.windir),
    )
    logger.debug("Release context: %s", context)
    return context
