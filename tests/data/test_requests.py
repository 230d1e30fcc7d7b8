"""Tests for lvrank/data/requests.py — Request Builder."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from lvrank.config.settings import RankerSettings
from lvrank.config.universe import DEFAULT_SYMBOLS
from lvrank.data.requests import (
    RequestSet,
    build_all_request_sets,
    build_request_set,
    build_url,
)
from lvrank.models.market import DataKind

_PROD = RankerSettings(_env_file=None)


class TestBuildUrl:
    def test_open_interest(self) -> None:
        assert (
            build_url("BTCUSDT", DataKind.OPEN_INTEREST, _PROD)
            == "https://fapi.binance.com/fapi/v1/openInterest?symbol=BTCUSDT"
        )

    def test_kline(self) -> None:
        assert (
            build_url("ETHUSDT", DataKind.KLINE, _PROD)
            == "https://fapi.binance.com/fapi/v1/klines?symbol=ETHUSDT&interval=2h&limit=168"
        )

    def test_price(self) -> None:
        assert (
            build_url("DOTUSDT", DataKind.PRICE, _PROD)
            == "https://api.binance.com/api/v3/ticker/price?symbol=DOTUSDT"
        )

    def test_custom_base_url(self, settings: RankerSettings) -> None:
        url = build_url("BTCUSDT", DataKind.KLINE, settings)
        assert url.startswith("https://fapi.test/fapi/v1/klines?")
        assert "limit=4" in url


class TestBuildRequestSet:
    @pytest.mark.parametrize("kind", list(DataKind))
    def test_order_and_length_match_universe(self, kind: DataKind) -> None:
        request_set = build_request_set(DEFAULT_SYMBOLS, kind, _PROD)
        assert request_set.kind == kind
        assert len(request_set) == len(DEFAULT_SYMBOLS)
        assert request_set.symbols == DEFAULT_SYMBOLS
        for symbol, url in zip(request_set.symbols, request_set.urls, strict=True):
            assert url.endswith(f"symbol={symbol}") or f"symbol={symbol}&" in url

    def test_accepts_list(self) -> None:
        request_set = build_request_set(["XRPUSDT", "ADAUSDT"], DataKind.PRICE, _PROD)
        assert request_set.symbols == ("XRPUSDT", "ADAUSDT")

    def test_empty_universe(self) -> None:
        assert len(build_request_set((), DataKind.PRICE, _PROD)) == 0

    def test_build_all(self) -> None:
        sets = build_all_request_sets(("BTCUSDT", "ETHUSDT"), _PROD)
        assert set(sets) == set(DataKind)
        assert all(len(s) == 2 for s in sets.values())


class TestRequestSet:
    def test_misaligned_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RequestSet(kind=DataKind.PRICE, symbols=("A", "B"), urls=("u1",))

    def test_frozen(self) -> None:
        request_set = build_request_set(("BTCUSDT",), DataKind.PRICE, _PROD)
        with pytest.raises(ValidationError):
            request_set.urls = ()  # type: ignore[misc]
