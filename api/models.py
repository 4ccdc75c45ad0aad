"""
Modelos de datos (DTOs) para la API REST.
Define response schemas usando Pydantic.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response del endpoint /healthz."""

    status: str = Field(..., description="Estado del servicio")
    version: str = Field(..., description="Versión de la API")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "1.0.0"
            }
        }


class ErrorResponse(BaseModel):
    """Response estándar de error."""

    error: str = Field(..., description="Mensaje de error")

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Failed to fetch tour data"
            }
        }
