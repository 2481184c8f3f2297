"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil

import typer
from rich.console import Console
from rich.table import Table

from adapters.local_client import LocalClient
from adapters.os_probe import detect_os_family
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_REQUIRED_BINARIES = ("ssh", "ssh-keyscan")


def _check_binary(name: str) -> tuple[bool, str]:
    path = shutil.which(name)
    if path:
        return True, path
    return False, "not found in PATH"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="keyops Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    missing = []
    for name in _REQUIRED_BINARIES:
        ok, detail = _check_binary(name)
        if not ok:
            missing.append(name)
        table.add_row(name, "OK" if ok else "FAIL", detail)

    family = detect_os_family(LocalClient(settings))
    table.add_row("Local OS", "OK" if family.is_unix() else "UNSUPPORTED", family.label())

    table.add_row("Command timeout", "OK", f"{settings.command_timeout_seconds:g}s")
    table.add_row("SSH extra args", "OK", settings.ssh_extra_args or "-")
    table.add_row("sudo", "OK", "enabled" if settings.use_sudo else "disabled")
    table.add_row("User config", "OK", str(get_user_env_file()))

    _console.print(table)

    if missing:
        _console.print(
            "\n[yellow]Note:[/yellow] install the OpenSSH client to get "
            + ", ".join(missing)
            + "."
        )
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive SSH setup (stores config in the user config .env)."""

    settings = AppSettings()

    extra = typer.prompt(
        "Extra ssh arguments",
        default=settings.ssh_extra_args or "-o StrictHostKeyChecking=accept-new",
        show_default=True,
    ).strip()
    connect_timeout = typer.prompt(
        "SSH connect timeout (seconds)",
        default=settings.ssh_connect_timeout_seconds,
        type=int,
    )
    use_sudo = typer.confirm("Run remote commands with sudo -n?", default=settings.use_sudo)

    if connect_timeout < 1:
        raise typer.BadParameter("connect timeout must be >= 1")

    env_path = write_user_env_vars(
        {
            "KEYOPS_SSH_EXTRA_ARGS": extra,
            "KEYOPS_SSH_CONNECT_TIMEOUT_SECONDS": str(connect_timeout),
            "KEYOPS_USE_SUDO": "true" if use_sudo else "false",
        }
    )

    _console.print(f"[green]Saved SSH config to:[/green] {env_path}")
