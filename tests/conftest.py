"""Shared fixtures for tests.

Binance REST 응답을 흉내내는 httpx.MockTransport fixture를 제공합니다.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

import httpx
import pytest

from lvrank.config.settings import RankerSettings
from tests.factories import FUTURES_BASE, SPOT_BASE, TEST_KLINE_LIMIT

# ---------------------------------------------------------------------------
# 디렉토리 경로 → pytest 마커 자동 매핑
# ---------------------------------------------------------------------------
_DIR_MARKER_MAP: dict[str, str] = {
    "/data/": "data",
    "/pipeline/": "integration",
    "/cli/": "integration",
    "/core/": "unit",
    "/models/": "unit",
    "/config/": "unit",
    "/metrics/": "unit",
    "/monitoring/": "unit",
}


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """디렉토리 경로 기반 자동 마커 부여."""
    for item in items:
        fspath = str(item.fspath)
        for dir_pattern, marker_name in _DIR_MARKER_MAP.items():
            if dir_pattern in fspath:
                item.add_marker(getattr(pytest.mark, marker_name))
                break


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def settings() -> RankerSettings:
    """테스트용 설정 (가짜 base URL, 짧은 kline window)."""
    return RankerSettings(
        futures_base_url=FUTURES_BASE,
        spot_base_url=SPOT_BASE,
        kline_limit=TEST_KLINE_LIMIT,
        request_timeout=1.0,
        batch_timeout=5.0,
        max_concurrency=50,
        symbols=None,
    )


FakeExchange = Callable[..., httpx.MockTransport]


@pytest.fixture()
def fake_exchange() -> FakeExchange:
    """Binance 세 엔드포인트를 흉내내는 MockTransport factory.

    Args (factory):
        open_interest: symbol → OI
        prices: symbol → price
        klines: symbol → raw kline 배열
        fail: 503을 돌려줄 (path 일부, symbol) 집합
        delays: symbol → 응답 지연 (초)
    """

    def _factory(
        *,
        open_interest: Mapping[str, float] | None = None,
        prices: Mapping[str, float] | None = None,
        klines: Mapping[str, list[Any]] | None = None,
        fail: set[tuple[str, str]] | None = None,
        delays: Mapping[str, float] | None = None,
        calls: list[str] | None = None,
    ) -> httpx.MockTransport:
        open_interest = open_interest or {}
        prices = prices or {}
        klines = klines or {}
        fail = fail or set()
        delays = delays or {}

        async def handler(request: httpx.Request) -> httpx.Response:
            symbol = request.url.params["symbol"]
            path = request.url.path
            if calls is not None:
                calls.append(f"{path}?{symbol}")
            delay = delays.get(symbol, 0.0)
            if delay:
                await asyncio.sleep(delay)
            if any(part in path and sym == symbol for part, sym in fail):
                return httpx.Response(503, json={"code": -1, "msg": "Service unavailable"})
            if path.endswith("/openInterest"):
                return httpx.Response(
                    200,
                    json={"symbol": symbol, "openInterest": str(open_interest[symbol]), "time": 1},
                )
            if path.endswith("/ticker/price"):
                return httpx.Response(200, json={"symbol": symbol, "price": str(prices[symbol])})
            if path.endswith("/klines"):
                return httpx.Response(200, json=klines[symbol])
            return httpx.Response(404, json={"code": -1, "msg": "not found"})

        return httpx.MockTransport(handler)

    return _factory
