#!/usr/bin/env python3
"""
Script para consultar un dataset de la Tour API (primera página o todas las páginas).

Uso:
    # Primera página con SIGNGU_CD de .env, guarda JSON y CSV
    python scripts/fetch.py basic

    # Todas las páginas
    python scripts/fetch.py durunubi --paginate
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

# Agregar directorio raíz al path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.config import get_settings
from tourdata.datasets import DATASETS, get_dataset
from tourdata.models import ResponseEnvelope
from tourdata.orchestrator import orchestrator_session


async def fetch(dataset_key: str, paginate: bool) -> ResponseEnvelope:
    dataset = get_dataset(dataset_key)
    async with orchestrator_session() as orchestrator:
        if paginate:
            return await orchestrator.fetch_with_pagination(dataset)
        return await orchestrator.fetch_single(dataset)


def main():
    """Función principal."""
    parser = argparse.ArgumentParser(
        description="Consulta un dataset de la Tour API y guarda el resultado"
    )
    parser.add_argument(
        "dataset",
        choices=list(DATASETS),
        help="Dataset a consultar"
    )
    parser.add_argument(
        "--paginate",
        action="store_true",
        help="Recorre todas las páginas (default: solo la primera)"
    )
    args = parser.parse_args()

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"❌ Configuración inválida: {e}")
        sys.exit(1)

    logging.basicConfig(level=settings.log_level.upper())

    try:
        envelope = asyncio.run(fetch(args.dataset, args.paginate))
    except Exception as e:
        print(f"\n❌ Error durante la consulta: {e}")
        sys.exit(1)

    header = envelope.header
    print("=" * 60)
    print("📊 RESULTADO")
    print("=" * 60)
    print(f"   Result: {header.result_code} {header.result_msg}")
    print(f"   Items: {len(envelope.items)}")
    if header.pages_fetched is not None:
        print(f"   Total count: {header.total_count}")
        print(f"   Páginas: {header.pages_fetched}")
    print(f"\n📁 Archivos en: {settings.output_dir}")


if __name__ == "__main__":
    main()
