"""Catálogo de datasets de la Tour API disponibles para recolección."""

from typing import Dict

from config.tour_api import (
    BASIC_TOUR_PATH,
    RELATED_TOUR_PATH,
    DURUNUBI_PATH,
    GREEN_TOUR_PATH,
)
from tourdata.models import DatasetSpec


BASIC = DatasetSpec(
    key="basic",
    label="tour data",
    endpoint_path=BASIC_TOUR_PATH,
    per_sub_region=True,
    batch_prefix="tour_data_batch",
)

RELATED = DatasetSpec(
    key="related",
    label="tour related data",
    endpoint_path=RELATED_TOUR_PATH,
    per_sub_region=True,
    batch_prefix="tour_related_data",
)

DURUNUBI = DatasetSpec(
    key="durunubi",
    label="durunubi data",
    endpoint_path=DURUNUBI_PATH,
    per_sub_region=False,
    save_paginated_csv=True,
)

GREEN = DatasetSpec(
    key="green",
    label="green tour data",
    endpoint_path=GREEN_TOUR_PATH,
    per_sub_region=False,
    batch_prefix="green_tour_data",
    save_paginated_csv=True,
)

DATASETS: Dict[str, DatasetSpec] = {
    spec.key: spec for spec in (BASIC, RELATED, DURUNUBI, GREEN)
}

# Orden en que se ejecutan los batches completos
BATCH_DATASETS = [BASIC, RELATED, GREEN]


def get_dataset(key: str) -> DatasetSpec:
    """
    Busca un dataset por su key.

    Raises:
        KeyError: Si el dataset no existe
    """
    try:
        return DATASETS[key]
    except KeyError:
        raise KeyError(f"Dataset desconocido: {key} (disponibles: {', '.join(DATASETS)})")
