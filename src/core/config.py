"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el adaptador de ACM lea perfil/región de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import EndpointType

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "certmatch"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "certmatch"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "certmatch"
    return Path.home() / ".config" / "certmatch"


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

    Los valores `None` no pisan lo que ya hubiera.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# certmatch user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adaptadores.
    """

    model_config = SettingsConfigDict(
        env_prefix="CERTMATCH_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    aws_profile: str | None = Field(
        default=None,
        description="Perfil de credenciales AWS (None = cadena por defecto de boto3).",
    )
    aws_region: str | None = Field(
        default=None,
        description="Región para endpoints REGIONAL (None = región de la sesión).",
    )
    default_region: str = Field(
        default="us-east-1",
        min_length=1,
        description="Región donde viven los certificados de endpoints EDGE.",
    )
    endpoint_type: EndpointType = Field(
        default=EndpointType.EDGE,
        description="Tipo de endpoint por defecto (EDGE/REGIONAL).",
    )

    aws_max_attempts: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Intentos máximos de botocore ante throttling/errores transitorios.",
    )
    acm_page_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Tamaño de página para ListCertificates.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI.",
    )

    @field_validator("endpoint_type", mode="before")
    @classmethod
    def _normalize_endpoint_type(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level
