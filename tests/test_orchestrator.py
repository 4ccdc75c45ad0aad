"""Tests del orquestador: llamadas individuales, paginadas y batches."""

from __future__ import annotations

import csv
import json
from collections import Counter
from pathlib import Path

import httpx
import pytest
from respx import MockRouter

from config.tour_api import SIGNGU_CD_LIST
from tests.conftest import UPSTREAM_PATTERN, RecordingSleep, make_items, upstream_body
from tourdata.datasets import BASIC, DURUNUBI, GREEN, RELATED
from tourdata.orchestrator import TourDataOrchestrator


def output_files(settings) -> list[Path]:
    output_dir = Path(settings.output_dir)
    return sorted(output_dir.iterdir()) if output_dir.exists() else []


@pytest.mark.asyncio
async def test_fetch_single_wraps_and_saves(
    orchestrator: TourDataOrchestrator, settings, respx_mock: MockRouter
) -> None:
    route = respx_mock.get(url__regex=UPSTREAM_PATTERN).mock(
        return_value=httpx.Response(200, json=upstream_body(make_items(2), total_count=2))
    )

    envelope = await orchestrator.fetch_single(BASIC)

    assert route.call_count == 1
    assert envelope.header.result_code == "0000"
    assert envelope.header.result_msg == "OK"
    assert envelope.header.request_url.endswith("signguCd=47111&_type=json")
    assert envelope.body["totalCount"] == 2
    assert len(envelope.items) == 2

    names = [p.name for p in output_files(settings)]
    assert names == [
        "tour_data_47_47111_2025-03-01T10-20-30-123Z.csv",
        "tour_data_47_47111_2025-03-01T10-20-30-123Z.json",
    ]


@pytest.mark.asyncio
async def test_fetch_single_defaults_header_and_skips_empty_csv(
    orchestrator: TourDataOrchestrator, settings, respx_mock: MockRouter
) -> None:
    respx_mock.get(url__regex=UPSTREAM_PATTERN).mock(
        return_value=httpx.Response(200, json={"response": {"body": {"items": "", "totalCount": 0}}})
    )

    envelope = await orchestrator.fetch_single(RELATED)

    assert envelope.header.result_code == "00"
    assert envelope.header.result_msg == "NORMAL SERVICE"
    assert [p.suffix for p in output_files(settings)] == [".json"]


@pytest.mark.asyncio
async def test_fetch_single_propagates_errors(
    orchestrator: TourDataOrchestrator, respx_mock: MockRouter
) -> None:
    respx_mock.get(url__regex=UPSTREAM_PATTERN).mock(return_value=httpx.Response(500))

    with pytest.raises(httpx.HTTPStatusError):
        await orchestrator.fetch_single(BASIC)


@pytest.mark.asyncio
async def test_fetch_with_pagination_builds_aggregate_envelope(
    orchestrator: TourDataOrchestrator, settings, upstream
) -> None:
    envelope = await orchestrator.fetch_with_pagination(BASIC)
    data = envelope.to_dict()

    assert data["header"]["totalCount"] == 250
    assert data["header"]["pagesFetched"] == 3
    assert "requestUrl" not in data["header"]
    assert data["body"]["numOfRows"] == 100
    assert data["body"]["pageNo"] == 3
    assert len(data["body"]["items"]["item"]) == 250
    assert {q["signguCd"] for q in upstream.requests} == {"47111"}
    # turismo básico paginado no escribe archivos
    assert output_files(settings) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("dataset", [GREEN, DURUNUBI], ids=["green", "durunubi"])
async def test_paginated_unscoped_datasets_save_csv(
    orchestrator: TourDataOrchestrator, settings, upstream, dataset
) -> None:
    upstream.total = 5

    envelope = await orchestrator.fetch_with_pagination(dataset)

    assert len(envelope.items) == 5
    assert [p.name for p in output_files(settings)] == ["tour_data_47_47111_2025-03-01T10-20-30-123Z.csv"]
    assert all("signguCd" not in q for q in upstream.requests)


@pytest.mark.asyncio
async def test_batch_collects_every_sub_region(
    orchestrator: TourDataOrchestrator, settings, sleep: RecordingSleep, upstream
) -> None:
    result = await orchestrator.run_batch(BASIC)

    assert result.total_items == len(result.items) == 250 * len(SIGNGU_CD_LIST)
    assert result.errors == []

    per_code = Counter(item["SIGNGU_CD"] for item in result.items)
    assert per_code == {code: 250 for code in SIGNGU_CD_LIST}

    # Tres páginas (100, 100, 50) por sub-región y ninguna cuarta
    pages = Counter((q["signguCd"], q["pageNo"]) for q in upstream.requests)
    assert len(upstream.requests) == 3 * len(SIGNGU_CD_LIST)
    assert all(count == 1 for count in pages.values())
    assert ("47111", "4") not in pages

    # Pausa entre sub-regiones, no después de la última
    assert sleep.calls.count(2.0) == len(SIGNGU_CD_LIST) - 1

    output = Path(result.output_file)
    assert output.name == "tour_data_batch_47_2025-03-01T10-20-30-123Z.csv"
    with open(output, encoding="utf-8-sig", newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == result.total_items
    assert list(rows[0].keys())[-1] == "SIGNGU_CD"


@pytest.mark.asyncio
async def test_batch_isolates_failing_sub_region(
    orchestrator: TourDataOrchestrator, upstream
) -> None:
    upstream.total = 10
    upstream.failing = {"47150"}

    result = await orchestrator.run_batch(RELATED)
    data = result.to_dict()

    codes = {item["SIGNGU_CD"] for item in result.items}
    assert codes == set(SIGNGU_CD_LIST) - {"47150"}
    assert data["totalItems"] == 10 * (len(SIGNGU_CD_LIST) - 1)
    assert len(data["errors"]) == 1
    assert data["errors"][0]["signguCd"] == "47150"
    assert "500" in data["errors"][0]["error"]
    assert Path(data["outputFile"]).name.startswith("tour_related_data_47_")


@pytest.mark.asyncio
async def test_green_batch_has_no_sub_region_loop(
    orchestrator: TourDataOrchestrator, sleep: RecordingSleep, upstream
) -> None:
    result = await orchestrator.run_batch(GREEN)

    assert result.total_items == 250
    assert len(upstream.requests) == 3
    assert "SIGNGU_CD" not in result.items[0]
    assert 2.0 not in sleep.calls
    assert Path(result.output_file).name.startswith("green_tour_data_47_")


@pytest.mark.asyncio
async def test_green_batch_records_error_without_sub_region(
    orchestrator: TourDataOrchestrator, settings, respx_mock: MockRouter
) -> None:
    respx_mock.get(url__regex=UPSTREAM_PATTERN).mock(side_effect=httpx.ConnectError("boom"))

    result = await orchestrator.run_batch(GREEN)
    data = result.to_dict()

    assert data == {"totalItems": 0, "errors": [{"error": "boom"}], "items": []}
    assert output_files(settings) == []


@pytest.mark.asyncio
async def test_run_all_batches_in_order(orchestrator: TourDataOrchestrator, upstream) -> None:
    upstream.total = 1

    results = await orchestrator.run_all_batches()

    assert list(results) == ["basic", "related", "green"]
    assert results["basic"].total_items == len(SIGNGU_CD_LIST)
    assert results["green"].total_items == 1
    assert json.dumps({k: r.to_dict() for k, r in results.items()})
