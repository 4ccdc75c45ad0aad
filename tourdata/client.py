"""
Cliente HTTP para la Tour API de data.go.kr.

Cada llamada es un único GET; los reintentos y la paginación
quedan en manos del llamador (ver tourdata.paginator).
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from api.config import Settings
from config.tour_api import BASE_YM, MOBILE_APP, MOBILE_OS, NUM_OF_ROWS, RESPONSE_TYPE
from tourdata.models import DatasetSpec, FetchedPage, normalize_items

logger = logging.getLogger(__name__)


class TourApiError(Exception):
    """La API respondió con un body que no se puede interpretar."""


class TourApiClient:
    """Cliente para los endpoints de listas de la Tour API."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        """
        Inicializa el cliente.

        Args:
            settings: Configuración (API key, región, base URL, timeout)
            http_client: Cliente httpx a reutilizar (si es None se crea uno propio)
        """
        self.settings = settings
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout_seconds)
        )

    async def __aenter__(self) -> "TourApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def build_url(
        self,
        dataset: DatasetSpec,
        page_no: int = 1,
        num_of_rows: int = NUM_OF_ROWS,
        signgu_cd: Optional[str] = None
    ) -> str:
        """
        Construye la URL de consulta para una página.

        El serviceKey se concatena tal cual: data.go.kr entrega la key
        ya codificada y volver a codificarla la invalida.
        """
        params: Dict[str, Any] = {
            "numOfRows": num_of_rows,
            "pageNo": page_no,
            "MobileOS": MOBILE_OS,
            "MobileApp": MOBILE_APP,
        }
        if dataset.per_sub_region:
            params["baseYm"] = BASE_YM
            params["areaCd"] = self.settings.area_cd or ""
            params["signguCd"] = signgu_cd or ""
        params["_type"] = RESPONSE_TYPE

        base = self.settings.tour_api_base_url.rstrip("/")
        return (
            f"{base}/{dataset.endpoint_path}"
            f"?serviceKey={self.settings.tour_api_key}&{urlencode(params)}"
        )

    async def fetch_page(
        self,
        dataset: DatasetSpec,
        page_no: int = 1,
        num_of_rows: int = NUM_OF_ROWS,
        signgu_cd: Optional[str] = None
    ) -> FetchedPage:
        """
        Obtiene una página del dataset.

        Args:
            dataset: Dataset a consultar
            page_no: Número de página (desde 1)
            num_of_rows: Items por página
            signgu_cd: Código de sub-región (solo datasets por sub-región)

        Returns:
            FetchedPage con el body crudo, los items y el totalCount

        Raises:
            httpx.HTTPError: Error de red o status no 2xx
            TourApiError: Si el body no es JSON válido
        """
        url = self.build_url(dataset, page_no, num_of_rows, signgu_cd)
        response = await self._client.get(url)
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            # Con key inválida la API responde XML aunque se pida _type=json
            raise TourApiError(
                f"Respuesta no JSON de {dataset.endpoint_path} (página {page_no}): "
                f"{response.text[:200]}"
            ) from e

        if not isinstance(data, dict):
            raise TourApiError(f"Respuesta inesperada de {dataset.endpoint_path}: {data!r}")

        body = (data.get("response") or {}).get("body") or {}
        items_block = body.get("items")
        items = normalize_items(items_block.get("item")) if isinstance(items_block, dict) else []

        return FetchedPage(
            raw=data,
            items=items,
            total_count=_to_int(body.get("totalCount")),
            request_url=self.mask_url(url)
        )

    def mask_url(self, url: str) -> str:
        """Reemplaza la serviceKey en la URL para no persistirla en los outputs."""
        key = self.settings.tour_api_key
        return url.replace(f"serviceKey={key}", "serviceKey=***", 1)


def _to_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0
