"""Detección del sistema operativo del destino."""

from __future__ import annotations

import logging

from core.domain.os_family import OSFamily
from core.errors import CommandError
from core.interfaces.client import Client

logger = logging.getLogger(__name__)


def detect_os_family(client: Client) -> OSFamily:
    """Ejecuta `uname -s` y lo traduce a `OSFamily`.

    Si `uname` no existe o falla, el destino no es Unix: devuelve UNKNOWN.
    """

    try:
        out = client.exec("uname", "-s")
    except CommandError as exc:
        logger.info("uname failed, assuming non-unix target: %s", exc)
        return OSFamily.UNKNOWN
    family = OSFamily.from_uname(out.decode("utf-8", errors="replace"))
    logger.debug("detected OS family: %s", family.value)
    return family
