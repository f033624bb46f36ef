"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/record store) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "envroute"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "envroute"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "envroute"
    return Path.home() / ".config" / "envroute"


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


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# envroute user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENVROUTE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos). No hay reintentos.",
    )
    user_agent: str = Field(
        default="envroute/0.1",
        min_length=1,
        description="User-Agent para las peticiones salientes.",
    )

    config_name: str = Field(
        default="Demo - Endpoint Addresses",
        min_length=1,
        description="Nombre (displayName) de la definición con el mapa de endpoints.",
    )
    busy_message: str = Field(
        default="Processing your request...",
        min_length=1,
        description="Mensaje del indicador de progreso.",
    )
    current_environment: str | None = Field(
        default=None,
        description="Identificador del entorno actual (URL base). Si falta se usa record_store_url.",
    )

    record_store_url: str | None = Field(
        default=None,
        description="URL de la organización Dataverse (p.ej. https://org.crm.dynamics.com).",
    )
    record_store_token: str | None = Field(
        default=None,
        description="Bearer token para la Web API de Dataverse.",
    )
    record_store_api_version: str = Field(
        default="9.2",
        min_length=1,
        description="Versión de la Web API de Dataverse.",
    )
    record_schema: Literal["dataverse", "default"] = Field(
        default="dataverse",
        description="Nombres físicos de tablas/campos a usar en las consultas.",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )
    log_json: bool = Field(
        default=False,
        description="Emitir logs como JSON en vez de formato consola.",
    )

    def resolve_current_environment(self) -> str | None:
        """Entorno explícito o, en su defecto, la URL de la organización."""

        if self.current_environment:
            return self.current_environment
        if self.record_store_url:
            return self.record_store_url.rstrip("/")
        return None
