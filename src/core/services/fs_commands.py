"""Helpers de sistema de ficheros y usuarios sobre un `Client`.

Cada helper es una única invocación remota. No hay lógica propia más allá de
construir argumentos y leer una línea de salida: la semántica de `chmod`,
`chown`, `mv`, etc. es la del sistema operativo destino.
"""

from __future__ import annotations

import logging

from core.domain.os_family import OSFamily
from core.errors import CommandError, UnsupportedOSError
from core.interfaces.client import Client

logger = logging.getLogger(__name__)

UNIX_TEMP_DIR = "/tmp"

# $0 = ruta, $1 = línea a añadir. Si el fichero no acaba en salto de línea,
# se añade uno antes para no pegar la clave a la última línea.
_APPEND_SCRIPT = (
    'if [ -s "$0" ] && [ -n "$(tail -c 1 "$0")" ]; then echo >> "$0"; fi; '
    'printf "%s\\n" "$1" >> "$0"'
)


def _require_unix(os_family: OSFamily) -> None:
    if not os_family.is_unix():
        raise UnsupportedOSError(os_family)


def _run(client: Client, name: str, *args: str) -> str:
    logger.debug("exec: %s %s", name, " ".join(args))
    out = client.exec(name, *args)
    return out.decode("utf-8", errors="replace")


def _test(client: Client, flag: str, path: str) -> bool:
    try:
        _run(client, "test", flag, path)
    except CommandError as exc:
        # test(1) sale con 1 cuando la condición es falsa; >1 es un error real.
        if exc.exit_code == 1:
            return False
        raise
    return True


def home(os_family: OSFamily, client: Client, usr: str) -> str:
    """Directorio home de `usr` en el destino."""

    _require_unix(os_family)
    if os_family is OSFamily.DARWIN:
        argv = ("dscl", ".", "-read", f"/Users/{usr}", "NFSHomeDirectory")
        out = _run(client, *argv).strip()
        # "NFSHomeDirectory: /Users/alice"
        path = out.split(":", 1)[1].strip() if ":" in out else ""
    else:
        argv = ("getent", "passwd", usr)
        out = _run(client, *argv).strip()
        fields = out.splitlines()[0].split(":") if out else []
        path = fields[5].strip() if len(fields) >= 6 else ""

    if not path:
        raise CommandError(argv, reason=f"no home directory found for user {usr!r}")
    return path


def user_group(os_family: OSFamily, client: Client, usr: str) -> str:
    """Grupo primario de `usr`."""

    _require_unix(os_family)
    grp = _run(client, "id", "-gn", usr).strip()
    if not grp:
        raise CommandError(("id", "-gn", usr), reason=f"no group found for user {usr!r}")
    return grp


def check_dir(os_family: OSFamily, client: Client, path: str) -> bool:
    _require_unix(os_family)
    return _test(client, "-d", path)


def check_file(os_family: OSFamily, client: Client, path: str) -> bool:
    _require_unix(os_family)
    return _test(client, "-f", path)


def mkdir(os_family: OSFamily, client: Client, path: str) -> None:
    _require_unix(os_family)
    _run(client, "mkdir", "-p", path)


def chown(os_family: OSFamily, client: Client, path: str, usr: str, grp: str) -> None:
    _require_unix(os_family)
    _run(client, "chown", f"{usr}:{grp}", path)


def chmod(os_family: OSFamily, client: Client, path: str, mode: int) -> None:
    """`chmod` con el modo en octal (0o700 -> "700")."""

    _require_unix(os_family)
    _run(client, "chmod", format(mode, "o"), path)


def copy(os_family: OSFamily, client: Client, src: str, dst: str) -> None:
    _require_unix(os_family)
    _run(client, "cp", "-p", src, dst)


def truncate(os_family: OSFamily, client: Client, path: str) -> None:
    """Deja `path` vacío (lo crea si no existe)."""

    _require_unix(os_family)
    _run(client, "cp", "/dev/null", path)


def move(os_family: OSFamily, client: Client, src: str, dst: str) -> None:
    _require_unix(os_family)
    _run(client, "mv", "-f", src, dst)


def append_to_file(os_family: OSFamily, client: Client, path: str, data: bytes | str) -> None:
    """Añade `data` como una línea al final de `path` (lo crea si no existe)."""

    _require_unix(os_family)
    text = data.decode("utf-8") if isinstance(data, bytes) else data
    _run(client, "sh", "-c", _APPEND_SCRIPT, path, text.rstrip("\r\n"))


def temp_dir(os_family: OSFamily) -> str:
    """Directorio temporal del destino (sin llamada remota)."""

    _require_unix(os_family)
    return UNIX_TEMP_DIR
