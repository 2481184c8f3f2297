"""Cliente local: ejecuta comandos en esta máquina.

Por qué existe:
- `ssh-keyscan` se lanza desde la máquina que gestiona los hosts, no desde el
  destino; y permite usar las operaciones contra el propio host.
- Comparte el mapeo de errores con `adapters.ssh_client`.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from core.config import AppSettings
from core.errors import CommandError
from core.interfaces.client import Client

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = 124


def run_argv(argv: Sequence[str], *, timeout: float | None) -> bytes:
    """Ejecuta `argv` sin shell y devuelve stdout; levanta `CommandError` si falla."""

    argv = list(argv)
    try:
        proc = subprocess.run(
            argv,
            capture_output=True,
            check=False,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise CommandError(argv, reason=f"{argv[0]} not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise CommandError(
            argv,
            exit_code=TIMEOUT_EXIT_CODE,
            reason=f"timeout after {timeout}s",
        ) from exc
    except OSError as exc:
        raise CommandError(argv, reason=str(exc)) from exc

    if proc.returncode != 0:
        stderr = (proc.stderr or b"").decode("utf-8", errors="replace")
        raise CommandError(argv, exit_code=int(proc.returncode), stderr=stderr)
    return proc.stdout or b""


class LocalClient(Client):
    """Implementa `Client` con `subprocess.run` en la máquina local."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def exec(self, name: str, *args: str) -> bytes:
        argv = [name, *args]
        logger.debug("[local] $ %s", " ".join(argv))
        return run_argv(argv, timeout=self._settings.command_timeout_seconds)
