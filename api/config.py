"""
Configuración del servicio usando Pydantic Settings.
Lee variables de entorno o .env file.

Los nombres de campo coinciden con las variables de entorno sin prefijo
(TOUR_API_KEY, AREA_CD, SIGNGU_CD, PORT, ...).
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from config.tour_api import BASE_URL


class Settings(BaseSettings):
    """Settings del colector de datos de turismo."""

    # Tour API
    tour_api_key: str = Field(..., min_length=1, description="serviceKey de data.go.kr")
    area_cd: Optional[str] = Field(None, description="Código de región (AREA_CD)")
    signgu_cd: Optional[str] = Field(
        None,
        description="Código de sub-región para llamadas individuales (SIGNGU_CD)"
    )
    tour_api_base_url: str = BASE_URL
    http_timeout_seconds: float = Field(default=30.0, gt=0)

    # Pausas entre requests (segundos)
    page_delay_seconds: float = Field(default=0.5, ge=0)
    batch_delay_seconds: float = Field(default=2.0, ge=0)

    # Server
    port: int = 3000
    log_level: str = "INFO"

    # Paths
    output_dir: str = "output"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Devuelve la instancia única de Settings (se construye en el primer uso)."""
    return Settings()
