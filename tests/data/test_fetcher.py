"""Tests for lvrank/data/fetcher.py — 순서 보존 fan-out/fan-in, fail-fast."""

from __future__ import annotations

import asyncio
import itertools
import random

import httpx
import pytest

from lvrank.config.settings import RankerSettings
from lvrank.core.exceptions import BatchTimeoutError, NetworkError, ParseError
from lvrank.data.client import AsyncBinanceRestClient
from lvrank.data.fetcher import BatchFetcher
from lvrank.data.requests import build_request_set
from lvrank.models.market import DataKind

_SYMBOLS = ("AAAUSDT", "BBBUSDT", "CCCUSDT", "DDDUSDT", "EEEUSDT")


def _echo_transport(delays: dict[str, float]) -> httpx.MockTransport:
    """symbol을 그대로 돌려주는 price 엔드포인트 (지연 주입)."""

    async def handler(request: httpx.Request) -> httpx.Response:
        symbol = request.url.params["symbol"]
        await asyncio.sleep(delays.get(symbol, 0.0))
        return httpx.Response(200, json={"symbol": symbol, "price": "1"})

    return httpx.MockTransport(handler)


async def _fetch(
    settings: RankerSettings,
    transport: httpx.MockTransport,
    symbols: tuple[str, ...] = _SYMBOLS,
) -> list:
    request_set = build_request_set(symbols, DataKind.PRICE, settings)
    async with AsyncBinanceRestClient(settings, transport=transport) as client:
        return await BatchFetcher(client, settings).fetch(request_set)


class TestOrderPreservation:
    @pytest.mark.asyncio()
    async def test_reverse_completion_order(self, settings: RankerSettings) -> None:
        # 뒤쪽 심볼이 먼저 완료되도록 지연
        delays = {s: 0.01 * (len(_SYMBOLS) - i) for i, s in enumerate(_SYMBOLS)}
        bodies = await _fetch(settings, _echo_transport(delays))
        assert [b["symbol"] for b in bodies] == list(_SYMBOLS)

    @pytest.mark.asyncio()
    @pytest.mark.parametrize("perm", list(itertools.permutations(_SYMBOLS[:4]))[:8])
    async def test_any_permutation(self, settings: RankerSettings, perm: tuple[str, ...]) -> None:
        rng = random.Random(hash(perm))
        delays = {s: rng.uniform(0, 0.02) for s in perm}
        bodies = await _fetch(settings, _echo_transport(delays), symbols=perm)
        assert len(bodies) == len(perm)
        assert [b["symbol"] for b in bodies] == list(perm)

    @pytest.mark.asyncio()
    async def test_empty_request_set(self, settings: RankerSettings) -> None:
        assert await _fetch(settings, _echo_transport({}), symbols=()) == []


class TestFailFast:
    @pytest.mark.asyncio()
    async def test_single_failure_fails_batch(self, settings: RankerSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.params["symbol"] == "CCCUSDT":
                return httpx.Response(500, json={"msg": "internal"})
            return httpx.Response(200, json={"price": "1"})

        with pytest.raises(NetworkError) as exc_info:
            await _fetch(settings, httpx.MockTransport(handler))
        assert exc_info.value.context["symbol"] == "CCCUSDT"
        assert exc_info.value.context["kind"] == "price"

    @pytest.mark.asyncio()
    async def test_error_not_wrapped_in_group(self, settings: RankerSettings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="not json")

        with pytest.raises(ParseError):
            await _fetch(settings, httpx.MockTransport(handler))

    @pytest.mark.asyncio()
    async def test_failure_cancels_in_flight_siblings(self, settings: RankerSettings) -> None:
        cancelled: list[str] = []

        async def handler(request: httpx.Request) -> httpx.Response:
            symbol = request.url.params["symbol"]
            if symbol == "AAAUSDT":
                await asyncio.sleep(0.05)
                return httpx.Response(503, json={})
            try:
                await asyncio.sleep(2.0)
            except asyncio.CancelledError:
                cancelled.append(symbol)
                raise
            return httpx.Response(200, json={})

        loop = asyncio.get_running_loop()
        started = loop.time()
        with pytest.raises(NetworkError):
            await _fetch(settings, httpx.MockTransport(handler))

        assert loop.time() - started < 1.0
        assert sorted(cancelled) == sorted(_SYMBOLS[1:])


class TestDeadline:
    @pytest.mark.asyncio()
    async def test_batch_timeout(self, settings: RankerSettings) -> None:
        slow = settings.model_copy(update={"batch_timeout": 0.05})
        delays = {"EEEUSDT": 1.0}
        with pytest.raises(BatchTimeoutError) as exc_info:
            await _fetch(slow, _echo_transport(delays))
        assert exc_info.value.context["kind"] == "price"
        assert isinstance(exc_info.value, NetworkError)


class TestConcurrencyCap:
    @pytest.mark.asyncio()
    async def test_in_flight_bounded(self, settings: RankerSettings) -> None:
        capped = settings.model_copy(update={"max_concurrency": 2})
        in_flight = 0
        peak = 0

        async def handler(request: httpx.Request) -> httpx.Response:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return httpx.Response(200, json={"symbol": request.url.params["symbol"]})

        bodies = await _fetch(capped, httpx.MockTransport(handler))
        assert len(bodies) == len(_SYMBOLS)
        assert peak <= 2
