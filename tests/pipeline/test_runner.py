"""Tests for lvrank/pipeline/runner.py — MockTransport 기반 end-to-end."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from lvrank.core.exceptions import ConfigurationError, NetworkError, NumericError, ParseError
from lvrank.data.client import AsyncBinanceRestClient
from lvrank.models.ranking import MetricName
from lvrank.pipeline.runner import RankingPipeline, build_result
from tests.factories import make_klines, make_snapshot

if TYPE_CHECKING:
    import httpx

    from lvrank.config.settings import RankerSettings

_UNIVERSE = ("AAAUSDT", "BBBUSDT")


def _factory(transport: httpx.MockTransport):
    def _make(settings: RankerSettings) -> AsyncBinanceRestClient:
        return AsyncBinanceRestClient(settings, transport=transport)

    return _make


def _two_symbol_exchange(fake_exchange, **kwargs) -> httpx.MockTransport:
    return fake_exchange(
        open_interest={"AAAUSDT": 100.0, "BBBUSDT": 50.0},
        prices={"AAAUSDT": 10.0, "BBBUSDT": 10.0},
        klines={"AAAUSDT": make_klines(2.0), "BBBUSDT": make_klines(4.0)},
        **kwargs,
    )


class TestBuildResult:
    def test_both_rankings(self, settings: RankerSettings) -> None:
        snapshot = make_snapshot(
            open_interest={"AAAUSDT": 100.0, "BBBUSDT": 50.0},
            prices={"AAAUSDT": 10.0, "BBBUSDT": 10.0},
            swings={"AAAUSDT": 2.0, "BBBUSDT": 4.0},
        )
        result = build_result(snapshot, settings)

        assert result.liquidity.metric == MetricName.LIQUIDITY
        assert result.liquidity.pairs() == [
            ("AAAUSDT", pytest.approx(1.0)),
            ("BBBUSDT", pytest.approx(2.0)),
        ]
        assert result.volatility.symbols == ("BBBUSDT", "AAAUSDT")
        assert result.volatility.values == pytest.approx((1.0, 2.0))
        assert [r.symbol for r in result.liquidity_records] == list(_UNIVERSE)
        assert [r.symbol for r in result.volatility_records] == list(_UNIVERSE)

    def test_numeric_error_propagates(self, settings: RankerSettings) -> None:
        snapshot = make_snapshot(
            open_interest={"AAAUSDT": 100.0, "BBBUSDT": 0.0},
            prices={"AAAUSDT": 10.0, "BBBUSDT": 10.0},
        )
        with pytest.raises(NumericError):
            build_result(snapshot, settings)


class TestRankingPipelineInit:
    def test_explicit_universe(self, settings: RankerSettings) -> None:
        pipeline = RankingPipeline([" aaausdt", "BBBUSDT "], settings)
        assert pipeline.universe == _UNIVERSE

    def test_settings_universe(self, settings: RankerSettings) -> None:
        custom = settings.model_copy(update={"symbols": ["ETHUSDT", "SOLUSDT"]})
        pipeline = RankingPipeline(settings=custom)
        assert pipeline.universe == ("ETHUSDT", "SOLUSDT")

    def test_default_universe(self, settings: RankerSettings) -> None:
        pipeline = RankingPipeline(settings=settings)
        assert pipeline.universe[0] == "BTCUSDT"
        assert len(pipeline.universe) == 44

    @pytest.mark.parametrize("universe", [[], ["AAAUSDT", "AAAUSDT"], ["AAAUSDT", ""]])
    def test_invalid_universe(self, settings: RankerSettings, universe: list[str]) -> None:
        with pytest.raises(ConfigurationError):
            RankingPipeline(universe, settings)


class TestRankingPipelineRun:
    @pytest.mark.asyncio()
    async def test_end_to_end(self, settings: RankerSettings, fake_exchange) -> None:
        calls: list[str] = []
        transport = _two_symbol_exchange(fake_exchange, calls=calls)
        pipeline = RankingPipeline(_UNIVERSE, settings, client_factory=_factory(transport))

        result = await pipeline.run()

        assert result.liquidity.pairs() == [
            ("AAAUSDT", pytest.approx(1.0)),
            ("BBBUSDT", pytest.approx(2.0)),
        ]
        assert result.volatility.symbols == ("BBBUSDT", "AAAUSDT")
        assert result.volatility.values == pytest.approx((1.0, 2.0))
        # 3 kinds x 2 symbols
        assert len(calls) == 6

    @pytest.mark.asyncio()
    async def test_single_failure_yields_no_result(
        self, settings: RankerSettings, fake_exchange
    ) -> None:
        transport = _two_symbol_exchange(fake_exchange, fail={("ticker/price", "BBBUSDT")})
        pipeline = RankingPipeline(_UNIVERSE, settings, client_factory=_factory(transport))

        with pytest.raises(NetworkError) as exc_info:
            await pipeline.run()
        assert exc_info.value.context["symbol"] == "BBBUSDT"
        assert exc_info.value.context["kind"] == "price"
        assert "ranking run over 2 symbols" in exc_info.value.__notes__

    @pytest.mark.asyncio()
    async def test_short_kline_window_is_parse_error(
        self, settings: RankerSettings, fake_exchange
    ) -> None:
        transport = fake_exchange(
            open_interest={"AAAUSDT": 100.0, "BBBUSDT": 50.0},
            prices={"AAAUSDT": 10.0, "BBBUSDT": 10.0},
            klines={"AAAUSDT": make_klines(2.0), "BBBUSDT": make_klines(4.0, n=2)},
        )
        pipeline = RankingPipeline(_UNIVERSE, settings, client_factory=_factory(transport))

        with pytest.raises(ParseError):
            await pipeline.run()

    @pytest.mark.asyncio()
    async def test_flat_market_is_numeric_error(
        self, settings: RankerSettings, fake_exchange
    ) -> None:
        transport = fake_exchange(
            open_interest={"AAAUSDT": 100.0, "BBBUSDT": 50.0},
            prices={"AAAUSDT": 10.0, "BBBUSDT": 10.0},
            klines={"AAAUSDT": make_klines(2.0), "BBBUSDT": make_klines(0.0)},
        )
        pipeline = RankingPipeline(_UNIVERSE, settings, client_factory=_factory(transport))

        with pytest.raises(NumericError):
            await pipeline.run()
