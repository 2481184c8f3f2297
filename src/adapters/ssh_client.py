"""Cliente SSH basado en el binario `ssh` del sistema.

Por qué el binario y no una librería SSH:
- Reutiliza la config, el agente y las claves del usuario (~/.ssh/config).
- Mantiene el proyecto sin dependencias de criptografía.

El comando remoto se construye con `shlex.join`, así que cada argumento llega
intacto al shell del destino.
"""

from __future__ import annotations

import logging
import shlex

from adapters.local_client import run_argv
from core.config import AppSettings
from core.domain.models import HostTarget
from core.errors import CommandError
from core.interfaces.client import Client

logger = logging.getLogger(__name__)

SSH_CONNECTION_ERROR = 255


class SSHClient(Client):
    """Implementa `Client` ejecutando cada comando vía `ssh user@host -- ...`."""

    def __init__(self, target: HostTarget, settings: AppSettings | None = None) -> None:
        self.target = target
        self._settings = settings or AppSettings()

    def _extra_args(self) -> list[str]:
        extra = self._settings.ssh_extra_args.strip()
        return shlex.split(extra) if extra else []

    def build_argv(self, name: str, *args: str) -> list[str]:
        """Línea de comando local completa para ejecutar `name args...` en el destino."""

        remote = [name, *args]
        if self._settings.use_sudo:
            remote = ["sudo", "-n", *remote]
        return [
            "ssh",
            "-p",
            str(int(self.target.port)),
            "-o",
            "BatchMode=yes",
            "-o",
            f"ConnectTimeout={self._settings.ssh_connect_timeout_seconds}",
            *self._extra_args(),
            self.target.user_host,
            "--",
            shlex.join(remote),
        ]

    def exec(self, name: str, *args: str) -> bytes:
        argv = self.build_argv(name, *args)
        logger.debug("[ssh %s] $ %s %s", self.target.user_host, name, " ".join(args))
        try:
            return run_argv(argv, timeout=self._settings.command_timeout_seconds)
        except CommandError as exc:
            if exc.exit_code == SSH_CONNECTION_ERROR:
                raise CommandError(
                    [name, *args],
                    exit_code=exc.exit_code,
                    stderr=exc.stderr,
                    reason=f"ssh connection to {self.target.user_host} failed: {exc.stderr.strip()}",
                ) from exc
            raise CommandError(
                [name, *args],
                exit_code=exc.exit_code,
                stderr=exc.stderr,
                reason=exc.reason,
            ) from exc
