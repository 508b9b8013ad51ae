"""Errores del Core.

Por qué una jerarquía propia:
- La CLI traduce cualquier `ReleaseError` a un mensaje `ERROR:` y exit 1.
- Los fallos de red o de ZIP no se reclasifican: se propagan tal cual.
"""

from __future__ import annotations


class ReleaseError(Exception):
    """Base de los errores esperables de los helpers de release."""


class ResolutionError(ReleaseError):
    """Una consulta obligatoria devolvió un resultado vacío."""


class ManifestError(ReleaseError):
    """No se pudo leer la versión de un `package.json`."""


class RepositoryNotFoundError(ReleaseError):
    """No hay repositorio `owner/repo` configurado ni deducible."""
