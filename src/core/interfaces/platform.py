"""Contrato de detección de capacidades de la plataforma."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.platform import LibC


@runtime_checkable
class LibcProbe(Protocol):
    """Detecta la biblioteca C del sistema (glibc vs musl)."""

    def detect(self) -> LibC:
        ...
