"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (validador de email, proveedor de identidad) lean
  config de forma consistente.

Las claves del proveedor y del servicio de validación se leen sin prefijo
(`API_KEY`, `ABSTRACT_API_KEY`, ...); el resto usa el prefijo `AUTHFLOW_`.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

PROVIDER_KEYS: tuple[str, ...] = (
    "API_KEY",
    "AUTH_DOMAIN",
    "PROJECT_ID",
    "STORAGE_BUCKET",
    "MESSAGING_SENDER_ID",
    "APP_ID",
    "ABSTRACT_API_KEY",
)


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "authflow"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "authflow"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "authflow"
    return Path.home() / ".config" / "authflow"


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


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v})

    lines = ["# authflow user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


def _plain_key(name: str) -> AliasChoices:
    # Acepta la clave tal cual (como la exporta el entorno de la app) y el
    # nombre del campo, para poder construir AppSettings(api_key=...) en tests.
    return AliasChoices(name, name.lower())


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTHFLOW_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    # Proveedor de identidad (claves del proyecto Firebase).
    api_key: str | None = Field(
        default=None,
        validation_alias=_plain_key("API_KEY"),
        description="API key pública del proyecto del proveedor de identidad.",
    )
    auth_domain: str | None = Field(default=None, validation_alias=_plain_key("AUTH_DOMAIN"))
    project_id: str | None = Field(default=None, validation_alias=_plain_key("PROJECT_ID"))
    storage_bucket: str | None = Field(default=None, validation_alias=_plain_key("STORAGE_BUCKET"))
    messaging_sender_id: str | None = Field(
        default=None,
        validation_alias=_plain_key("MESSAGING_SENDER_ID"),
    )
    app_id: str | None = Field(default=None, validation_alias=_plain_key("APP_ID"))

    # Servicio de verificación de emails (Abstract API).
    abstract_api_key: str | None = Field(
        default=None,
        validation_alias=_plain_key("ABSTRACT_API_KEY"),
        description="API key del servicio de validación de emails.",
    )
    email_validation_url: str = Field(
        default="https://emailvalidation.abstractapi.com/v1/",
        min_length=8,
        description="Endpoint del servicio de validación de emails.",
    )
    identity_toolkit_url: str = Field(
        default="https://identitytoolkit.googleapis.com/v1",
        min_length=8,
        description="Base URL de la API REST del proveedor de identidad.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="authflow/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones salientes.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging raíz (DEBUG, INFO, WARNING, ...).",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> str:
        level = str(value or "").strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return level

    def provider_values(self) -> dict[str, str | None]:
        """Claves reconocidas y su valor actual (para diagnóstico)."""

        return {key: getattr(self, key.lower()) for key in PROVIDER_KEYS}

    def missing_keys(self) -> list[str]:
        return [key for key, value in self.provider_values().items() if not value]
