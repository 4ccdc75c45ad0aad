#!/usr/bin/env python3
"""
Script de batch: recolecta los datasets por sub-región y ecoturismo y los guarda en CSV.

Uso:
    # Todos los batches (básico, relacionado, ecoturismo)
    python scripts/run_batch.py

    # Solo algunos datasets
    python scripts/run_batch.py --dataset basic --dataset green
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, List

from pydantic import ValidationError

# Agregar directorio raíz al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.config import get_settings
from tourdata.datasets import BATCH_DATASETS, get_dataset
from tourdata.models import BatchResult
from tourdata.orchestrator import orchestrator_session


async def run_batches(dataset_keys: List[str]) -> Dict[str, BatchResult]:
    """Ejecuta los batches pedidos en orden, con un único cliente HTTP."""
    results: Dict[str, BatchResult] = {}
    async with orchestrator_session() as orchestrator:
        for key in dataset_keys:
            dataset = get_dataset(key)
            print(f"\n📋 Processing {dataset.label}...")
            results[key] = await orchestrator.run_batch(dataset)
    return results


def print_summary(results: Dict[str, BatchResult]) -> None:
    """Imprime el resumen por dataset y la lista de errores."""
    print("\n✅ Batch processing completed successfully!")
    print("📊 Summary:")
    for key, result in results.items():
        print(f"   - {get_dataset(key).label}: {result.total_items} items")

    all_errors = [err for result in results.values() for err in result.errors]
    print(f"   - Total errors: {len(all_errors)}")

    if all_errors:
        print("\n❌ Errors occurred:")
        for err in all_errors:
            if err.signgu_cd:
                print(f"   - SIGNGU_CD {err.signgu_cd}: {err.error}")
            else:
                print(f"   - {err.error}")

    outputs = [result.output_file for result in results.values() if result.output_file]
    if outputs:
        print("\n📁 Archivos generados:")
        for output in outputs:
            print(f"   - {output}")


def main():
    """Función principal."""
    parser = argparse.ArgumentParser(
        description="Ejecuta los batches de recolección de la Tour API y guarda CSVs"
    )
    parser.add_argument(
        "--dataset",
        action="append",
        choices=[d.key for d in BATCH_DATASETS],
        help="Dataset a procesar (repetible, default: todos)"
    )
    args = parser.parse_args()

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"❌ Configuración inválida: {e}")
        sys.exit(1)

    logging.basicConfig(level=settings.log_level.upper())

    dataset_keys = args.dataset or [d.key for d in BATCH_DATASETS]

    print("🚀 Starting batch processing...")
    print("Environment variables:")
    print(f"  AREA_CD: {settings.area_cd}")
    print(f"  TOUR_API_KEY: {'Set' if settings.tour_api_key else 'Not set'}")
    print(f"  Datasets: {', '.join(dataset_keys)}")

    try:
        results = asyncio.run(run_batches(dataset_keys))
    except KeyboardInterrupt:
        print("\n\n⚠️  Proceso interrumpido por el usuario")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Batch processing failed: {e}")
        sys.exit(1)

    print_summary(results)
    print(f"\n📁 Check the '{settings.output_dir}' directory for the generated CSV files.")


if __name__ == "__main__":
    main()
