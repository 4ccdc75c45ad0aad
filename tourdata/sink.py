"""Persistencia de resultados en archivos JSON y CSV."""

import csv
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from tourdata.models import ItemRecord, ResponseEnvelope

logger = logging.getLogger(__name__)


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """Timestamp ISO-8601 UTC con milisegundos y sufijo Z (2025-03-01T10:20:30.123Z)."""
    now = now or datetime.now(timezone.utc)
    iso = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z")


def file_timestamp(now: Optional[datetime] = None) -> str:
    """
    Timestamp ISO-8601 UTC apto para nombres de archivo.

    Ej: 2025-03-01T10:20:30.123Z -> 2025-03-01T10-20-30-123Z
    """
    return iso_timestamp(now).replace(":", "-").replace(".", "-")


class OutputWriter:
    """Escribe envelopes e items agregados en el directorio de salida."""

    def __init__(
        self,
        output_dir: str = "output",
        area_cd: Optional[str] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        """
        Args:
            output_dir: Directorio de salida (se crea si no existe)
            area_cd: Código de región usado en los nombres de archivo
            clock: Fuente de la hora actual (inyectable en tests)
        """
        self.output_dir = Path(output_dir)
        self.area_cd = area_cd
        self._clock = clock

    def _path_for(self, prefix: str, suffix: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / f"{prefix}_{file_timestamp(self._clock())}.{suffix}"

    def save_as_json(self, envelope: ResponseEnvelope, signgu_cd: Optional[str] = None) -> Path:
        """
        Guarda el envelope completo como JSON indentado.

        Returns:
            Ruta del archivo escrito
        """
        filepath = self._path_for(f"tour_data_{self.area_cd}_{signgu_cd}", "json")
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(envelope.to_dict(), f, ensure_ascii=False, indent=2)

        logger.info(f"JSON saved: {filepath}")
        return filepath

    def save_as_csv(self, envelope: ResponseEnvelope, signgu_cd: Optional[str] = None) -> Optional[Path]:
        """
        Guarda body.items.item del envelope como CSV.

        Returns:
            Ruta del archivo escrito, o None si no hay items
        """
        items = envelope.items
        if not items:
            logger.info("No data to save as CSV")
            return None

        filepath = self._path_for(f"tour_data_{self.area_cd}_{signgu_cd}", "csv")
        write_items_csv(items, filepath)
        logger.info(f"CSV saved: {filepath}")
        return filepath

    def save_batch_as_csv(self, items: List[ItemRecord], prefix: str = "tour_data_batch") -> Optional[Path]:
        """
        Guarda una lista agregada de items como CSV.

        Args:
            items: Items de todas las sub-regiones
            prefix: Prefijo del nombre de archivo

        Returns:
            Ruta del archivo escrito, o None si no hay items
        """
        if not items:
            logger.info("No data to save as CSV")
            return None

        filepath = self._path_for(f"{prefix}_{self.area_cd}", "csv")
        write_items_csv(items, filepath)
        logger.info(f"Batch CSV saved: {filepath}")
        logger.info(f"Total records: {len(items)}")
        return filepath


def write_items_csv(items: List[ItemRecord], filepath: Path) -> None:
    """
    Escribe items como CSV.

    Las columnas salen de las keys del primer item, en su orden;
    keys que solo aparecen en items posteriores se descartan.
    """
    fieldnames = list(items[0].keys())

    # utf-8-sig para que Excel lea correctamente el texto coreano
    with open(filepath, "w", encoding="utf-8-sig", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore", restval="")
        writer.writeheader()
        for item in items:
            writer.writerow(item)
