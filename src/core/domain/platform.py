"""Etiquetas de plataforma para nombrar artefactos.

Por qué en el dominio:
- Son mapeos puros de strings; la detección real (uname/libc) vive en
  adaptadores para poder sustituirla en tests.
"""

from __future__ import annotations

from enum import Enum


class LibC(str, Enum):
    """Biblioteca C detectada en Linux."""

    GLIBC = "glibc"
    MUSL = "musl"
    UNKNOWN = "unknown"


_ARCH_ALIASES = {
    "aarch64": "arm64",
    "x86_64": "amd64",
    "amd64": "amd64",
}


def normalize_arch(machine: str) -> str:
    """`aarch64 -> arm64`, `x86_64|amd64 -> amd64`; el resto sin cambios."""

    return _ARCH_ALIASES.get(machine, machine)


def normalize_os(system: str, libc: LibC = LibC.UNKNOWN) -> str:
    """Nombre de SO usado en los artefactos.

    - `linux` con musl -> `alpine`
    - `darwin` -> `macos`
    - cualquier otro valor se devuelve en minúsculas.
    """

    name = system.lower()
    if name == "linux":
        return "alpine" if libc is LibC.MUSL else "linux"
    if name == "darwin":
        return "macos"
    return name
