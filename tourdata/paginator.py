"""Recorrido de páginas de la Tour API hasta agotar el totalCount."""

import logging
from typing import Optional

from config.tour_api import NUM_OF_ROWS
from tourdata.client import TourApiClient
from tourdata.models import DatasetSpec, PaginationResult
from tourdata.pacing import RequestPacer

logger = logging.getLogger(__name__)


async def paginate(
    client: TourApiClient,
    dataset: DatasetSpec,
    pacer: RequestPacer,
    signgu_cd: Optional[str] = None,
    num_of_rows: int = NUM_OF_ROWS,
    tag_signgu_cd: bool = False
) -> PaginationResult:
    """
    Recolecta todas las páginas de un dataset.

    Se detiene cuando una página viene vacía o cuando lo acumulado alcanza
    el totalCount reportado en la página 1. Si una página falla, registra el
    error y devuelve lo acumulado hasta ese punto (no hay reintentos).

    Args:
        client: Cliente de la Tour API
        dataset: Dataset a recorrer
        pacer: Política de espera entre páginas
        signgu_cd: Código de sub-región (datasets por sub-región)
        num_of_rows: Items por página
        tag_signgu_cd: Si True, agrega SIGNGU_CD a cada item

    Returns:
        PaginationResult con items, totalCount y páginas obtenidas
    """
    result = PaginationResult()
    page_no = 1

    while True:
        try:
            logger.info(f"  Fetching page {page_no}...")
            page = await client.fetch_page(dataset, page_no, num_of_rows, signgu_cd)
        except Exception as e:
            scope = f" for SIGNGU_CD {signgu_cd}" if signgu_cd else ""
            logger.error(f"✗ Error fetching page {page_no}{scope}: {e}")
            result.error = str(e) or type(e).__name__
            break

        # totalCount solo se toma de la primera página
        if page_no == 1:
            result.total_count = page.total_count
            logger.info(f"  Total count: {result.total_count}")

        if not page.items:
            logger.info(f"  No more data on page {page_no}")
            break

        items = page.items
        if tag_signgu_cd:
            items = [{**item, "SIGNGU_CD": signgu_cd} for item in items]

        result.items.extend(items)
        result.pages_fetched += 1
        logger.info(f"  ✓ Found {len(items)} items on page {page_no}")

        if len(result.items) >= result.total_count:
            logger.info(f"  Reached total count ({result.total_count}), stopping pagination")
            break

        page_no += 1
        await pacer.wait_between_pages()

    return result
