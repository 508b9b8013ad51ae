"""Operaciones de sistema de ficheros del release.

VS Code empaqueta algunos módulos en un asar que luego espera encontrar
desempaquetado en `node_modules.asar`. Todas esas dependencias ya están en
`node_modules`, así que basta con enlazarlo: tanto VS Code como las
extensiones buscan ficheros (ripgrep, wasm de oniguruma) en esa ruta.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

ASAR_LINK_NAME = "node_modules.asar"
MODULES_DIR_NAME = "node_modules"


def _is_junction(path: Path) -> bool:
    isjunction = getattr(os.path, "isjunction", None)
    if isjunction is not None:
        return isjunction(path)
    # Python < 3.12: junction = reparse point de tipo mount point.
    tag = getattr(os.lstat(path), "st_reparse_tag", 0)
    return tag == stat.IO_REPARSE_TAG_MOUNT_POINT


def _remove_path(path: Path) -> None:
    if not os.path.lexists(path):
        return
    if _is_junction(path):
        # rmtree rechaza las junctions; rmdir borra el enlace, no el destino.
        path.rmdir()
    elif path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def symlink_asar(root: Path = Path("."), *, windows: bool = False) -> Path:
    """Recrea `node_modules.asar` apuntando a `node_modules` dentro de `root`.

    - Windows: junction de directorio (`mklink /J`, no requiere privilegios).
    - Resto: symlink relativo.
    """

    link = root / ASAR_LINK_NAME
    _remove_path(link)

    if windows:
        # mklink takes the link name first.
        subprocess.run(
            ["cmd", "/c", "mklink", "/J", ASAR_LINK_NAME, MODULES_DIR_NAME],
            cwd=root,
            check=True,
            capture_output=True,
        )
    else:
        link.symlink_to(MODULES_DIR_NAME, target_is_directory=True)

    logger.info("Linked %s -> %s", link, MODULES_DIR_NAME)
    return link
