"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import HostKeyScan


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("keyops", style="bold cyan")
    subtitle = Text("SSH host keys • authorized_keys", style="dim")
    console.print(Panel(Text.assemble(title, "  ", subtitle), border_style="cyan", expand=False))


def build_host_keys_table(scan: HostKeyScan) -> Table:
    """Tabla con una fila por clave escaneada."""

    table = Table(title=f"Host keys: {scan.host}:{scan.port}")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Key", style="white", overflow="fold")

    for idx, line in enumerate(scan.keys, start=1):
        parts = line.split()
        key_type = parts[1] if len(parts) >= 2 else "?"
        key = parts[2] if len(parts) >= 3 else line
        table.add_row(str(idx), Text(key_type), Text(key))
    return table


def print_error(console: Console, message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
