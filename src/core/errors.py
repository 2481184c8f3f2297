"""Errores del Core.

Por qué una jerarquía propia:
- La CLI solo necesita capturar `KeyOpsError` para mostrar un mensaje limpio.
- Los servicios envuelven cada fallo con una línea de contexto y encadenan la
  causa (`raise ... from exc`), así no se pierde el error original.
"""

from __future__ import annotations

from typing import Sequence


class KeyOpsError(Exception):
    """Base de todos los errores del proyecto."""


class UnsupportedOSError(KeyOpsError):
    """El sistema operativo del destino no está soportado (no es Unix)."""

    def __init__(self, os_family: object | None = None) -> None:
        self.os_family = os_family
        name = getattr(os_family, "value", os_family)
        detail = f" ({name})" if os_family is not None else ""
        super().__init__(f"unsupported OS{detail}")


class CommandError(KeyOpsError):
    """Fallo al ejecutar un comando a través de un `Client`.

    `exit_code` es None cuando el comando ni siquiera llegó a ejecutarse
    (binario inexistente, error al lanzar el proceso).
    """

    def __init__(
        self,
        argv: Sequence[str],
        *,
        exit_code: int | None = None,
        stderr: str = "",
        reason: str | None = None,
    ) -> None:
        self.argv = list(argv)
        self.exit_code = exit_code
        self.stderr = stderr
        self.reason = reason
        super().__init__(self._format())

    def _format(self) -> str:
        cmd = " ".join(self.argv)
        parts = [f"command `{cmd}` failed"]
        if self.exit_code is not None:
            parts.append(f"(exit {self.exit_code})")
        msg = " ".join(parts)
        detail = self.reason or self.stderr.strip()
        if detail:
            msg = f"{msg}: {detail.splitlines()[-1]}"
        return msg


class OperationError(KeyOpsError):
    """Un paso de una operación de alto nivel falló.

    El mensaje sigue el formato `"<contexto>: <causa>"`.
    """

    def __init__(self, context: str, cause: BaseException) -> None:
        self.context = context
        self.cause = cause
        super().__init__(f"{context}: {cause}")
