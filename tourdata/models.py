"""Modelos de datos para la recolección de datos de turismo."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


ItemRecord = Dict[str, Any]


class DatasetSpec(BaseModel):
    """Describe un dataset de la API: endpoint y forma de recolección."""
    key: str
    label: str
    endpoint_path: str
    per_sub_region: bool
    batch_prefix: Optional[str] = None
    save_paginated_csv: bool = False


class FetchedPage(BaseModel):
    """Resultado de una sola llamada GET a la API."""
    raw: Dict[str, Any]
    items: List[ItemRecord] = Field(default_factory=list)
    total_count: int = 0
    request_url: str


class PaginationResult(BaseModel):
    """Items acumulados de todas las páginas recorridas."""
    items: List[ItemRecord] = Field(default_factory=list)
    total_count: int = 0
    pages_fetched: int = 0
    error: Optional[str] = None


class EnvelopeHeader(BaseModel):
    """Header agregado alrededor de la respuesta de la API."""
    model_config = ConfigDict(populate_by_name=True)

    result_code: str = Field(..., alias="resultCode")
    result_msg: str = Field(..., alias="resultMsg")
    timestamp: str
    request_url: Optional[str] = Field(None, alias="requestUrl")
    total_count: Optional[int] = Field(None, alias="totalCount")
    pages_fetched: Optional[int] = Field(None, alias="pagesFetched")


class ResponseEnvelope(BaseModel):
    """Envelope {header, body} que se persiste y se devuelve por HTTP.

    El body es el body de la API tal cual (o el agregado de la paginación),
    así que se mantiene como dict abierto.
    """
    header: EnvelopeHeader
    body: Dict[str, Any]

    @property
    def items(self) -> List[ItemRecord]:
        """Items en body.items.item (lista vacía si no existen)."""
        items = self.body.get("items")
        if not isinstance(items, dict):
            return []
        return normalize_items(items.get("item"))

    def to_dict(self) -> Dict[str, Any]:
        """Serializa con los nombres camelCase de la API, sin campos vacíos del header."""
        data = self.model_dump(by_alias=True)
        data["header"] = {k: v for k, v in data["header"].items() if v is not None}
        return data


class BatchError(BaseModel):
    """Error registrado para una sub-región (o para el dataset completo)."""
    signgu_cd: Optional[str] = Field(None, alias="signguCd")
    error: str

    model_config = ConfigDict(populate_by_name=True)


class BatchResult(BaseModel):
    """Resultado de un batch: items agregados y errores por sub-región."""
    model_config = ConfigDict(populate_by_name=True)

    total_items: int = Field(..., alias="totalItems")
    errors: List[BatchError] = Field(default_factory=list)
    items: List[ItemRecord] = Field(default_factory=list)
    output_file: Optional[str] = Field(None, alias="outputFile")

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=True)
        data["errors"] = [
            {k: v for k, v in err.items() if v is not None} for err in data["errors"]
        ]
        if data["outputFile"] is None:
            del data["outputFile"]
        return data


def normalize_items(item: Any) -> List[ItemRecord]:
    """
    Normaliza body.items.item a una lista.

    La API devuelve un objeto suelto cuando hay un solo resultado y
    un string vacío en `items` cuando no hay resultados.
    """
    if item is None or item == "":
        return []
    if isinstance(item, list):
        return item
    if isinstance(item, dict):
        return [item]
    return []
