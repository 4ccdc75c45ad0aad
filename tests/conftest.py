"""Fixtures compartidos: settings de prueba, upstream simulado y orquestador sin pausas."""

from __future__ import annotations

import re
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from typing import Any
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest
from respx import MockRouter

from api.config import Settings
from tourdata.client import TourApiClient
from tourdata.orchestrator import TourDataOrchestrator
from tourdata.pacing import RequestPacer
from tourdata.sink import OutputWriter

API_KEY = "test-key"
AREA_CD = "47"
SIGNGU_CD = "47111"
UPSTREAM_PATTERN = re.compile(r"^https://apis\.data\.go\.kr/B551011/")
FIXED_NOW = datetime(2025, 3, 1, 10, 20, 30, 123000, tzinfo=timezone.utc)


def make_items(count: int, start: int = 0, prefix: str = "site") -> list[dict[str, Any]]:
    return [
        {"rlteTatsNm": f"{prefix}-{i}", "rlteRank": str(i), "areaCd": AREA_CD}
        for i in range(start, start + count)
    ]


def upstream_body(items: list[dict[str, Any]], total_count: int, page_no: int = 1) -> dict[str, Any]:
    return {
        "response": {
            "header": {"resultCode": "0000", "resultMsg": "OK"},
            "body": {
                "items": {"item": items} if items else "",
                "numOfRows": 100,
                "pageNo": page_no,
                "totalCount": total_count,
            },
        }
    }


def query_of(request: httpx.Request) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(urlsplit(str(request.url)).query).items()}


class FakeTourApi:
    """Upstream simulado: sirve `total` items por sub-región en páginas de numOfRows."""

    def __init__(self, total: int = 250, failing: set[str] | None = None) -> None:
        self.total = total
        self.failing = failing or set()
        self.requests: list[dict[str, str]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        query = query_of(request)
        self.requests.append(query)

        signgu_cd = query.get("signguCd", "")
        if signgu_cd in self.failing:
            return httpx.Response(500, text="upstream failure")

        page_no = int(query["pageNo"])
        rows = int(query["numOfRows"])
        start = (page_no - 1) * rows
        count = max(0, min(rows, self.total - start))
        items = make_items(count, start, prefix=signgu_cd or "all")
        return httpx.Response(200, json=upstream_body(items, self.total, page_no))


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        tour_api_key=API_KEY,
        area_cd=AREA_CD,
        signgu_cd=SIGNGU_CD,
        output_dir=str(tmp_path / "output"),
        _env_file=None,
    )


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def pacer(sleep: RecordingSleep) -> RequestPacer:
    return RequestPacer(page_delay=0.5, batch_delay=2.0, sleep=sleep)


@pytest.fixture
def writer(settings: Settings) -> OutputWriter:
    return OutputWriter(settings.output_dir, area_cd=settings.area_cd, clock=lambda: FIXED_NOW)


@pytest.fixture
def fake_api() -> FakeTourApi:
    return FakeTourApi()


@pytest.fixture
def upstream(respx_mock: MockRouter, fake_api: FakeTourApi) -> FakeTourApi:
    respx_mock.get(url__regex=UPSTREAM_PATTERN).mock(side_effect=fake_api)
    return fake_api


@pytest.fixture
async def client(settings: Settings) -> AsyncIterator[TourApiClient]:
    async with httpx.AsyncClient() as http_client:
        yield TourApiClient(settings, http_client=http_client)


@pytest.fixture
def orchestrator(
    settings: Settings, client: TourApiClient, pacer: RequestPacer, writer: OutputWriter
) -> TourDataOrchestrator:
    return TourDataOrchestrator(settings, client, pacer=pacer, writer=writer)
