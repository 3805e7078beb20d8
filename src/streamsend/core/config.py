"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/API) lean credenciales de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOST = "app.streamsend.com"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "streamsend"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "streamsend"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "streamsend"
    return Path.home() / ".config" / "streamsend"


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

    Las claves existentes que no aparecen en `values` se conservan.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# streamsend user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la librería.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="STREAMSEND_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    username: str | None = Field(
        default=None,
        description="Login ID de la cuenta StreamSend (usuario de Basic Auth).",
    )
    password: str | None = Field(
        default=None,
        description="API key de la cuenta StreamSend (password de Basic Auth).",
    )
    host: str = Field(
        default=DEFAULT_HOST,
        min_length=1,
        description="Host de la API (sin esquema ni path).",
    )
    scheme: str = Field(
        default="https",
        pattern="^https?$",
        description="Esquema de conexión; https salvo en entornos de prueba.",
    )
    port: int | None = Field(
        default=None,
        ge=1,
        le=65535,
        description="Puerto explícito; None usa el del esquema.",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None deja el de httpx.",
    )
    user_agent: str = Field(
        default="streamsend-python/0.1",
        min_length=1,
        description="User-Agent enviado en cada request.",
    )

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and self.password is not None
