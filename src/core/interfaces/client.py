"""Contrato del cliente que ejecuta comandos.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Los servicios funcionan igual contra la máquina local, un host SSH o un
  cliente falso en los tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Client(Protocol):
    """Ejecuta un comando con argumentos y devuelve stdout crudo.

    Reglas de diseño:
    - `name` y `args` se pasan tal cual; el cliente se encarga del quoting si
      necesita pasar por un shell remoto.
    - Un fallo (exit != 0, binario inexistente, timeout) se señala con
      `core.errors.CommandError`.
    """

    def exec(self, name: str, *args: str) -> bytes:
        ...
