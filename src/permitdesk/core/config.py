"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (cliente HTTP, store de credenciales) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_URL = "http://localhost:8080"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "permitdesk"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "permitdesk"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "permitdesk"
    return Path.home() / ".config" / "permitdesk"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def get_default_credentials_path() -> Path:
    return get_user_config_dir() / "credentials.json"


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
    """Escribe o actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# permitdesk user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Settings centrales de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin filtrarse al Core.
    - Un único contrato de configuración para la CLI y los adaptadores.
    """

    model_config = SettingsConfigDict(
        env_prefix="PERMITDESK_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Orden: primero el proyecto (dev), luego la config global del usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        min_length=1,
        validation_alias=AliasChoices("PERMITDESK_API_URL", "NEXT_PUBLIC_API_URL"),
        description="Base URL del backend de permisos (los endpoints se concatenan tal cual).",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None desactiva los timeouts.",
    )
    user_agent: str = Field(
        default="permitdesk/0.1",
        min_length=1,
        description="User-Agent para cada petición.",
    )

    credentials_path: Path | None = Field(
        default=None,
        description="Ubicación del archivo de credenciales (por defecto, el directorio de config del usuario).",
    )
    signin_path: str = Field(
        default="/signin",
        min_length=1,
        description="Ruta a la que el auth gate manda a quien no está autenticado.",
    )
    home_path: str = Field(
        default="/",
        min_length=1,
        description="Ruta a la que el auth gate manda a quien ya está autenticado desde páginas solo-públicas.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de log del root logger (DEBUG, INFO, WARNING, ...).",
    )

    def resolved_credentials_path(self) -> Path:
        return self.credentials_path or get_default_credentials_path()
