"""
FastAPI application principal.

Expone endpoints REST para:
- Health check
- Consulta individual, paginada y batch de turismo básico
- Consulta individual, paginada y batch de atracciones relacionadas
- Consulta paginada de rutas Durunubi
- Consulta paginada y batch de ecoturismo

Cada endpoint es un adaptador 1:1 sobre TourDataOrchestrator; los errores
se registran en el log y se devuelven como 500 con un mensaje fijo.
"""

import logging
from typing import Any, Awaitable, Callable

from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import __version__
from api.models import ErrorResponse, HealthResponse
from tourdata.datasets import BASIC, DURUNUBI, GREEN, RELATED
from tourdata.orchestrator import TourDataOrchestrator, orchestrator_session

logger = logging.getLogger(__name__)

# Inicializar FastAPI
app = FastAPI(
    title="Tour Data API",
    description="API REST que recolecta datos de turismo de data.go.kr y los guarda como JSON/CSV",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

Operation = Callable[[TourDataOrchestrator], Awaitable[Any]]

ERROR_RESPONSES = {500: {"model": ErrorResponse}}


# Dependency: fábrica de sesiones del orquestador (reemplazable en tests)
def get_session_factory():
    return orchestrator_session


async def run_operation(
    session_factory,
    operation: Operation,
    start_message: str,
    done_message: str,
    error_message: str
) -> JSONResponse:
    """
    Ejecuta una operación del orquestador y la convierte en respuesta HTTP.

    Args:
        session_factory: Fábrica de sesiones (ver orchestrator_session)
        operation: Operación a ejecutar sobre el orquestador
        start_message: Mensaje de log al iniciar
        done_message: Mensaje de log al terminar
        error_message: Mensaje fijo para el cliente en caso de error

    Returns:
        JSONResponse 200 con el resultado, o 500 con {"error": error_message}
    """
    try:
        logger.info(start_message)
        async with session_factory() as orchestrator:
            result = await operation(orchestrator)
        logger.info(done_message)
        return JSONResponse(content=result.to_dict())
    except Exception as e:
        logger.exception(f"Error: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": error_message}
        )


# Healthcheck endpoint
@app.get(
    "/healthz",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check"
)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


# Root endpoint
@app.get("/", include_in_schema=False)
async def root():
    return JSONResponse({
        "message": "Tour Data API",
        "version": __version__,
        "docs": "/docs"
    })


# ====================================================================
# TURISMO BÁSICO (기초지자체 중심 관광지)
# ====================================================================

@app.get("/tour", tags=["Tour"], responses=ERROR_RESPONSES, summary="Primera página de turismo básico")
async def get_tour(session_factory=Depends(get_session_factory)):
    return await run_operation(
        session_factory,
        lambda o: o.fetch_single(BASIC),
        "Fetching tour data and saving to files...",
        "Data fetched and saved successfully",
        "Failed to fetch tour data"
    )


@app.get("/tour/pagination", tags=["Tour"], responses=ERROR_RESPONSES, summary="Turismo básico paginado")
async def get_tour_pagination(session_factory=Depends(get_session_factory)):
    return await run_operation(
        session_factory,
        lambda o: o.fetch_with_pagination(BASIC),
        "Fetching tour data with pagination...",
        "Tour data with pagination fetched successfully",
        "Failed to fetch tour data with pagination"
    )


@app.get("/tour/batch", tags=["Tour"], responses=ERROR_RESPONSES, summary="Batch de turismo básico por sub-región")
async def get_tour_batch(session_factory=Depends(get_session_factory)):
    return await run_operation(
        session_factory,
        lambda o: o.run_batch(BASIC),
        "Starting batch processing for multiple SIGNGU_CD values...",
        "Batch processing completed successfully",
        "Failed to process batch tour data"
    )


# ====================================================================
# ATRACCIONES RELACIONADAS (관광지별 연관 관광지)
# ====================================================================

@app.get("/tour/related", tags=["Related"], responses=ERROR_RESPONSES, summary="Primera página de atracciones relacionadas")
async def get_tour_related(session_factory=Depends(get_session_factory)):
    return await run_operation(
        session_factory,
        lambda o: o.fetch_single(RELATED),
        "Fetching tour related data and saving to files...",
        "Tour related data fetched and saved successfully",
        "Failed to fetch tour related data"
    )


@app.get("/tour/related/pagination", tags=["Related"], responses=ERROR_RESPONSES, summary="Atracciones relacionadas paginadas")
async def get_tour_related_pagination(session_factory=Depends(get_session_factory)):
    return await run_operation(
        session_factory,
        lambda o: o.fetch_with_pagination(RELATED),
        "Fetching tour related data with pagination...",
        "Tour related data with pagination fetched successfully",
        "Failed to fetch tour related data with pagination"
    )


@app.get("/tour/related/batch", tags=["Related"], responses=ERROR_RESPONSES, summary="Batch de atracciones relacionadas")
async def get_tour_related_batch(session_factory=Depends(get_session_factory)):
    return await run_operation(
        session_factory,
        lambda o: o.run_batch(RELATED),
        "Starting batch processing for related tour data...",
        "Batch processing for related tour data completed successfully",
        "Failed to process batch related tour data"
    )


# ====================================================================
# DURUNUBI Y ECOTURISMO (생태관광)
# ====================================================================

@app.get("/durunubi/pagination", tags=["Durunubi"], responses=ERROR_RESPONSES, summary="Rutas Durunubi paginadas")
async def get_durunubi_pagination(session_factory=Depends(get_session_factory)):
    return await run_operation(
        session_factory,
        lambda o: o.fetch_with_pagination(DURUNUBI),
        "Fetching durunubi data with pagination...",
        "Durunubi data with pagination fetched successfully",
        "Failed to fetch durunubi data with pagination"
    )


@app.get("/green-tour/pagination", tags=["Green tour"], responses=ERROR_RESPONSES, summary="Ecoturismo paginado")
async def get_green_tour_pagination(session_factory=Depends(get_session_factory)):
    return await run_operation(
        session_factory,
        lambda o: o.fetch_with_pagination(GREEN),
        "Fetching green tour data with pagination...",
        "Green tour data with pagination fetched successfully",
        "Failed to fetch green tour data with pagination"
    )


@app.get("/green-tour/batch", tags=["Green tour"], responses=ERROR_RESPONSES, summary="Batch de ecoturismo")
async def get_green_tour_batch(session_factory=Depends(get_session_factory)):
    return await run_operation(
        session_factory,
        lambda o: o.run_batch(GREEN),
        "Starting batch processing for green tour data...",
        "Batch processing for green tour data completed successfully",
        "Failed to process batch green tour data"
    )


# Exception handlers
@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handler para excepciones no controladas."""
    logger.error(f"❌ Error no controlado: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )


if __name__ == "__main__":
    import uvicorn
    from api.config import get_settings

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
