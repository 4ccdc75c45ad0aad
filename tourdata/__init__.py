"""
Módulo de recolección de datos de turismo de la Tour API (data.go.kr).

Componentes:
- client: Cliente HTTP de una página (Fetcher)
- paginator: Recorrido de páginas hasta el totalCount
- orchestrator: Llamadas individuales, paginadas y batches por sub-región
- sink: Escritura de JSON/CSV en el directorio de salida
- datasets: Catálogo de endpoints
- models: Modelos de datos
"""

from tourdata.client import TourApiClient, TourApiError
from tourdata.orchestrator import TourDataOrchestrator, orchestrator_session
from tourdata.pacing import RequestPacer
from tourdata.paginator import paginate
from tourdata.sink import OutputWriter
from tourdata.models import BatchResult, PaginationResult, ResponseEnvelope

__all__ = [
    "TourApiClient",
    "TourApiError",
    "TourDataOrchestrator",
    "orchestrator_session",
    "RequestPacer",
    "paginate",
    "OutputWriter",
    "BatchResult",
    "PaginationResult",
    "ResponseEnvelope",
]
