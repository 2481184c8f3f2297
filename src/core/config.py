"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los clientes (local/SSH) leen timeouts y opciones de ssh de un único sitio.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "keyops"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (XDG; macOS usa Application Support)."""

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Los valores None se ignoran; las claves existentes se conservan.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# keyops user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core.
    - Un único contrato de configuración para CLI y adaptadores.
    """

    model_config = SettingsConfigDict(
        env_prefix="KEYOPS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    command_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por comando ejecutado (segundos).",
    )
    ssh_connect_timeout_seconds: int = Field(
        default=10,
        ge=1,
        le=600,
        description="ConnectTimeout pasado a ssh (segundos).",
    )
    ssh_extra_args: str = Field(
        default="",
        description="Argumentos extra para ssh (p.ej. '-o StrictHostKeyChecking=accept-new').",
    )
    default_ssh_port: int = Field(
        default=22,
        ge=1,
        le=65535,
        description="Puerto por defecto para ssh y ssh-keyscan.",
    )
    use_sudo: bool = Field(
        default=False,
        description="Prefijar los comandos remotos con `sudo -n`.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING...).",
    )
