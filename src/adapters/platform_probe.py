"""Detección de libc del sistema (implementa `LibcProbe`).

En vez de parsear la salida de `ldd --version` (Alpine la manda a stderr
con exit 1), se pregunta a `platform.libc_ver()` y, si no reconoce glibc,
se busca el loader dinámico de musl.
"""

from __future__ import annotations

import glob
import platform

from core.domain.platform import LibC

MUSL_LOADER_GLOB = "/lib/ld-musl-*.so.1"


class SystemLibcProbe:
    """Probe real; los tests usan un fake con el mismo `detect()`."""

    def __init__(self, musl_loader_glob: str = MUSL_LOADER_GLOB) -> None:
        self._musl_loader_glob = musl_loader_glob

    def detect(self) -> LibC:
        name, _version = platform.libc_ver()
        if name == "glibc":
            return LibC.GLIBC
        if name == "musl" or glob.glob(self._musl_loader_glob):
            return LibC.MUSL
        return LibC.UNKNOWN
