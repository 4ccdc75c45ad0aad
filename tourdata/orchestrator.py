"""Orquestador de la recolección: fetch → paginación → batch → archivos."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Dict, Optional

import httpx

from api.config import Settings, get_settings
from config.tour_api import (
    DEFAULT_RESULT_CODE,
    DEFAULT_RESULT_MSG,
    NUM_OF_ROWS,
    SIGNGU_CD_LIST,
)
from tourdata.client import TourApiClient
from tourdata.datasets import BATCH_DATASETS
from tourdata.models import (
    BatchError,
    BatchResult,
    DatasetSpec,
    EnvelopeHeader,
    ResponseEnvelope,
)
from tourdata.pacing import RequestPacer
from tourdata.paginator import paginate
from tourdata.sink import OutputWriter, iso_timestamp

logger = logging.getLogger(__name__)


class TourDataOrchestrator:
    """Coordina cliente, paginación, pausas y escritura de archivos."""

    def __init__(
        self,
        settings: Settings,
        client: TourApiClient,
        pacer: Optional[RequestPacer] = None,
        writer: Optional[OutputWriter] = None
    ):
        """
        Inicializa el orquestador.

        Args:
            settings: Configuración del servicio
            client: Cliente de la Tour API
            pacer: Política de pausas (default: desde settings)
            writer: Escritor de archivos (default: settings.output_dir)
        """
        self.settings = settings
        self.client = client
        self.pacer = pacer or RequestPacer.from_settings(settings)
        self.writer = writer or OutputWriter(settings.output_dir, area_cd=settings.area_cd)

    def _now(self) -> str:
        return iso_timestamp(datetime.now(timezone.utc))

    async def fetch_single(self, dataset: DatasetSpec) -> ResponseEnvelope:
        """
        Obtiene la primera página del dataset y la guarda como JSON y CSV.

        Usa el SIGNGU_CD de settings para datasets por sub-región.
        Los errores de la API se propagan al llamador.
        """
        signgu_cd = self.settings.signgu_cd
        page = await self.client.fetch_page(dataset, 1, NUM_OF_ROWS, signgu_cd)

        upstream = page.raw.get("response") or {}
        upstream_header = upstream.get("header") or {}

        envelope = ResponseEnvelope(
            header=EnvelopeHeader(
                result_code=upstream_header.get("resultCode") or DEFAULT_RESULT_CODE,
                result_msg=upstream_header.get("resultMsg") or DEFAULT_RESULT_MSG,
                timestamp=self._now(),
                request_url=page.request_url,
            ),
            body=upstream.get("body") or page.raw,
        )

        self.writer.save_as_json(envelope, signgu_cd)
        self.writer.save_as_csv(envelope, signgu_cd)

        return envelope

    async def fetch_with_pagination(self, dataset: DatasetSpec) -> ResponseEnvelope:
        """
        Recorre todas las páginas del dataset y arma un envelope agregado.

        Para durunubi y ecoturismo el agregado también se guarda como CSV.
        """
        signgu_cd = self.settings.signgu_cd if dataset.per_sub_region else None
        if signgu_cd:
            logger.info(f"Fetching {dataset.label} for SIGNGU_CD: {signgu_cd} with pagination...")
        else:
            logger.info(f"Fetching {dataset.label} with pagination...")

        result = await paginate(self.client, dataset, self.pacer, signgu_cd=signgu_cd)
        logger.info(f"✓ Total items collected for {signgu_cd or dataset.label}: {len(result.items)}")

        envelope = ResponseEnvelope(
            header=EnvelopeHeader(
                result_code=DEFAULT_RESULT_CODE,
                result_msg=DEFAULT_RESULT_MSG,
                timestamp=self._now(),
                total_count=result.total_count,
                pages_fetched=result.pages_fetched,
            ),
            body={
                "items": {"item": result.items},
                "totalCount": result.total_count,
                "numOfRows": NUM_OF_ROWS,
                "pageNo": result.pages_fetched,
            },
        )

        if dataset.save_paginated_csv:
            self.writer.save_as_csv(envelope, self.settings.signgu_cd)

        return envelope

    async def run_batch(self, dataset: DatasetSpec) -> BatchResult:
        """
        Ejecuta el batch de un dataset y guarda el agregado en un único CSV.

        Datasets por sub-región recorren SIGNGU_CD_LIST con una pausa entre
        códigos; un error en un código se registra y el batch continúa.

        Returns:
            BatchResult con totalItems, errores e items
        """
        if dataset.per_sub_region:
            logger.info(
                f"Starting batch processing for {len(SIGNGU_CD_LIST)} SIGNGU_CD values ({dataset.label})..."
            )
            result = await self._run_sub_region_batch(dataset)
        else:
            logger.info(f"Starting batch processing for {dataset.label}...")
            result = await self._run_single_batch(dataset)

        logger.info("Batch processing completed!")
        logger.info(f"Total items collected: {result.total_items}")
        logger.info(f"Errors: {len(result.errors)}")
        for err in result.errors:
            logger.warning(f"  - {err.signgu_cd + ': ' if err.signgu_cd else ''}{err.error}")

        output = self.writer.save_batch_as_csv(result.items, dataset.batch_prefix or dataset.key)
        if output:
            result.output_file = str(output)

        return result

    async def _run_sub_region_batch(self, dataset: DatasetSpec) -> BatchResult:
        items = []
        errors = []
        total = len(SIGNGU_CD_LIST)

        for idx, signgu_cd in enumerate(SIGNGU_CD_LIST, 1):
            logger.info(f"Processing SIGNGU_CD: {signgu_cd} ({idx}/{total})")

            try:
                page_result = await paginate(
                    self.client,
                    dataset,
                    self.pacer,
                    signgu_cd=signgu_cd,
                    tag_signgu_cd=True
                )
            except Exception as e:
                logger.error(f"✗ Error processing SIGNGU_CD: {signgu_cd}: {e}")
                errors.append(BatchError(signgu_cd=signgu_cd, error=str(e) or "Unknown error"))
            else:
                items.extend(page_result.items)
                logger.info(f"✓ Found {len(page_result.items)} items for SIGNGU_CD: {signgu_cd}")
                if page_result.error:
                    errors.append(BatchError(signgu_cd=signgu_cd, error=page_result.error))

            if idx < total:
                await self.pacer.wait_between_regions()

        return BatchResult(total_items=len(items), errors=errors, items=items)

    async def _run_single_batch(self, dataset: DatasetSpec) -> BatchResult:
        items = []
        errors = []

        try:
            page_result = await paginate(self.client, dataset, self.pacer)
        except Exception as e:
            logger.error(f"✗ Error processing {dataset.label}: {e}")
            errors.append(BatchError(error=str(e) or "Unknown error"))
        else:
            items.extend(page_result.items)
            logger.info(f"✓ Found {len(page_result.items)} items for {dataset.label}")
            if page_result.error:
                errors.append(BatchError(error=page_result.error))

        return BatchResult(total_items=len(items), errors=errors, items=items)

    async def run_all_batches(self) -> Dict[str, BatchResult]:
        """
        Ejecuta los batches de turismo básico, relacionado y ecoturismo, en ese orden.

        Returns:
            Diccionario dataset.key -> BatchResult
        """
        results: Dict[str, BatchResult] = {}
        for dataset in BATCH_DATASETS:
            logger.info(f"📋 Processing {dataset.label}...")
            results[dataset.key] = await self.run_batch(dataset)
        return results


@asynccontextmanager
async def orchestrator_session(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None
) -> AsyncIterator[TourDataOrchestrator]:
    """
    Crea un orquestador con su propio cliente HTTP y lo cierra al salir.

    Args:
        settings: Configuración (default: get_settings())
        http_client: Cliente httpx a reutilizar (tests)
    """
    settings = settings or get_settings()
    async with TourApiClient(settings, http_client=http_client) as client:
        yield TourDataOrchestrator(settings, client)
