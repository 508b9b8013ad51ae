"""Entornos de release.

La etiqueta de entorno decide qué workflow run tiene los artefactos:
pull requests de release en production, pushes a `main` en staging y una
rama arbitraria de pull request en development.
"""

from __future__ import annotations

from enum import Enum


class Environment(str, Enum):
    """Entornos de release soportados."""

    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"

    @classmethod
    def default(cls) -> "Environment":
        """Entorno asumido cuando no se indica ninguno."""

        return cls.PRODUCTION

    @classmethod
    def parse(cls, value: "str | Environment | None") -> "Environment":
        """Convierte una etiqueta libre en un entorno (production por defecto)."""

        if isinstance(value, Environment):
            return value
        normalized = (value or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return cls.default()
