"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde (CLI) sin acoplar el Core a subprocess/SSH.
- Serialización estable de resultados de escaneo para exportarlos.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, computed_field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HostTarget(BaseModel):
    """Host remoto al que se conecta el cliente SSH."""

    host: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Hostname o IP del destino.",
    )
    port: int = Field(
        default=22,
        ge=1,
        le=65535,
        description="Puerto SSH del destino.",
    )
    user: str | None = Field(
        default=None,
        description="Usuario SSH (si se omite, el de la config local de ssh).",
    )

    @property
    def user_host(self) -> str:
        return f"{self.user}@{self.host}" if self.user else self.host


class HostKeyScan(BaseModel):
    """Resultado de escanear las claves públicas de un host.

    Por qué existe:
    - Agrupa las líneas de `ssh-keyscan` con el destino y el momento del
      escaneo, para exportar a JSON o a un known_hosts local.
    """

    host: str = Field(..., min_length=1, description="Host escaneado.")
    port: int = Field(default=22, ge=1, le=65535, description="Puerto escaneado.")
    keys: list[str] = Field(
        default_factory=list,
        description="Líneas de clave tal cual las devuelve ssh-keyscan (sin comentarios).",
    )
    scanned_at: datetime = Field(
        default_factory=_utcnow,
        description="Momento del escaneo (UTC).",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def key_types(self) -> list[str]:
        """Tipos de clave presentes (p.ej. 'ssh-ed25519'), sin duplicados."""

        seen: list[str] = []
        for line in self.keys:
            parts = line.split()
            if len(parts) >= 2 and parts[1] not in seen:
                seen.append(parts[1])
        return seen
