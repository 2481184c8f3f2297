"""CLI principal (Typer).

Por qué Typer + Rich:
- Comandos tipados con ayuda autogenerada.
- Salida legible (tablas) sin mezclar presentación con la lógica del Core.

Las opciones globales (`--host`, `--os`, ...) eligen el cliente y la familia
de SO; cada comando delega en `core.services.ssh_commands`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_scan_json
from adapters.known_hosts import DEFAULT_KNOWN_HOSTS, append_known_hosts
from adapters.local_client import LocalClient
from adapters.os_probe import detect_os_family
from adapters.ssh_client import SSHClient
from cli import doctor
from cli.ui_components import build_host_keys_table, print_banner, print_error
from core.config import AppSettings
from core.domain.models import HostKeyScan, HostTarget
from core.domain.os_family import OSFamily
from core.errors import KeyOpsError
from core.interfaces.client import Client
from core.logging_config import configure_logging
from core.services import ssh_commands

app = typer.Typer(
    no_args_is_help=True,
    help="Manage SSH host keys and authorized_keys files on Unix hosts.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


@dataclass
class CliState:
    settings: AppSettings
    client: Client
    os_override: OSFamily | None = None
    _os_family: OSFamily | None = None

    @property
    def os_family(self) -> OSFamily:
        if self._os_family is None:
            self._os_family = self.os_override or detect_os_family(self.client)
        return self._os_family


def _state(ctx: typer.Context) -> CliState:
    state = ctx.find_object(CliState)
    assert state is not None, "main callback did not run"
    return state


@app.callback()
def main(
    ctx: typer.Context,
    host: Optional[str] = typer.Option(
        None, "--host", "-H", help="Target host (default: run commands locally)."
    ),
    ssh_port: Optional[int] = typer.Option(None, "--ssh-port", min=1, max=65535, help="SSH port of the target."),
    ssh_user: Optional[str] = typer.Option(None, "--ssh-user", help="SSH login user for the target."),
    os_family: Optional[OSFamily] = typer.Option(
        None, "--os", case_sensitive=False, help="Skip detection and assume this OS family."
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, ...)."),
    banner: bool = typer.Option(False, "--banner/--no-banner", help="Print the banner."),
) -> None:
    settings = AppSettings()
    configure_logging(log_level or settings.log_level)

    if banner:
        print_banner(_console)

    client: Client
    if host:
        target = HostTarget(host=host, port=ssh_port or settings.default_ssh_port, user=ssh_user)
        client = SSHClient(target, settings)
    else:
        if ssh_port is not None or ssh_user:
            raise typer.BadParameter("--ssh-port/--ssh-user require --host")
        client = LocalClient(settings)

    ctx.obj = CliState(settings=settings, client=client, os_override=os_family)


def _fail(exc: KeyOpsError) -> NoReturn:
    print_error(_console, str(exc))
    raise typer.Exit(code=1)


@app.command(name="host-keys")
def host_keys(
    ctx: typer.Context,
    scan_host: str = typer.Argument(..., metavar="HOST", help="Host whose public keys are scanned."),
    port: Optional[int] = typer.Option(None, "--port", "-p", min=1, max=65535, help="SSH port to scan."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Export the scan to this JSON file."),
    known_hosts: Optional[Path] = typer.Option(
        None,
        "--known-hosts",
        help=f"Append new keys to this known_hosts file (e.g. {DEFAULT_KNOWN_HOSTS}).",
    ),
) -> None:
    """Scan the public SSH keys of HOST with ssh-keyscan."""

    state = _state(ctx)
    port = port or state.settings.default_ssh_port
    try:
        keys = ssh_commands.get_host_keys(state.os_family, state.client, scan_host, port)
    except KeyOpsError as exc:
        _fail(exc)

    scan = HostKeyScan(host=scan_host, port=port, keys=keys)
    _console.print(build_host_keys_table(scan))

    try:
        if json_path is not None:
            out = export_scan_json(scan=scan, output_path=json_path)
            _console.print(f"[green]Saved scan to:[/green] {out}")
        if known_hosts is not None:
            added = append_known_hosts(scan=scan, path=known_hosts)
            _console.print(f"[green]{added} new key(s) added to:[/green] {known_hosts}")
    except OSError as exc:
        print_error(_console, f"error writing the scan: {exc}")
        raise typer.Exit(code=1) from exc


@app.command(name="copy-id")
def copy_id(
    ctx: typer.Context,
    user: str = typer.Argument(..., help="User whose authorized_keys receives the key."),
    key: Optional[str] = typer.Option(None, "--key", help="Public key line."),
    key_file: Optional[Path] = typer.Option(
        None, "--key-file", exists=True, dir_okay=False, readable=True, help="Public key file (.pub)."
    ),
) -> None:
    """Add a public key to USER's authorized_keys on the target."""

    if (key is None) == (key_file is None):
        raise typer.BadParameter("pass exactly one of --key or --key-file")
    data = key if key is not None else key_file.read_text(encoding="utf-8")
    data = data.strip()
    if not data:
        raise typer.BadParameter("the public key is empty")

    state = _state(ctx)
    try:
        ssh_commands.copy_id(state.os_family, state.client, user, data.encode("utf-8"))
    except KeyOpsError as exc:
        _fail(exc)
    _console.print(f"[green]Key added to authorized_keys of[/green] {user}")


@app.command(name="keys-path")
def keys_path(
    ctx: typer.Context,
    user: str = typer.Argument(..., help="User whose .ssh directory is resolved."),
) -> None:
    """Print the SSH keys directory of USER on the target."""

    state = _state(ctx)
    try:
        path = ssh_commands.get_keys_path(state.os_family, state.client, user)
    except KeyOpsError as exc:
        _fail(exc)
    typer.echo(path)


@app.command(name="detect-os")
def detect_os(ctx: typer.Context) -> None:
    """Print the OS family of the target."""

    state = _state(ctx)
    family = state.os_family
    typer.echo(family.value)
    if not family.is_unix():
        raise typer.Exit(code=1)


def run() -> None:
    app()
