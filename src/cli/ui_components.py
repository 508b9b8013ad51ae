"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import logging

from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ReleaseContext


def configure_logging(console: Console, *, verbose: bool = False) -> None:
    """Enruta `logging` a la consola de diagnóstico (stderr).

    Por qué aquí:
    - Los módulos del Core solo usan `logging.getLogger(__name__)`; la CLI
      decide formato y nivel.
    """

    handler = RichHandler(console=console, show_path=False, show_time=False, markup=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    # httpx loguea cada request en INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def print_banner(console: Console) -> None:
    """Imprime el banner (solo en comandos interactivos como `doctor`)."""

    title = Text("release-helpers", style="bold cyan")
    subtitle = Text("Versiones • Artefactos de CI • Enlaces", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_context_table(context: ReleaseContext) -> Table:
    """Tabla con los metadatos del release."""

    table = Table(title="Release context")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("VERSION", context.version or "-")
    table.add_row("VSCODE_VERSION", context.vscode_version or "-")
    table.add_row("OS", context.os)
    table.add_row("ARCH", context.arch)
    table.add_row("RELEASE_PATH", str(context.release_path))
    table.add_row("WINDOWS", "yes" if context.windows else "no")
    return table
