"""Ranking Pipeline — snapshot → metrics → ranked series.

한 번의 run은 전부 성공(두 랭킹 완성)하거나 RankerError로 실패합니다.
부분 결과는 반환하지 않습니다.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable, Iterable

from loguru import logger

from lvrank.config.settings import RankerSettings, get_settings
from lvrank.config.universe import load_universe
from lvrank.core.exceptions import RankerError, add_context_note
from lvrank.data.client import AsyncBinanceRestClient
from lvrank.data.service import MarketSnapshotService
from lvrank.metrics.liquidity import compute_liquidity_from_snapshot
from lvrank.metrics.ranker import rank_liquidity, rank_volatility
from lvrank.metrics.volatility import compute_volatility_from_snapshot
from lvrank.models.market import MarketSnapshot
from lvrank.models.ranking import RankingResult

ClientFactory = Callable[[RankerSettings], AsyncBinanceRestClient]


def _default_client_factory(settings: RankerSettings) -> AsyncBinanceRestClient:
    return AsyncBinanceRestClient(settings)


def build_result(snapshot: MarketSnapshot, settings: RankerSettings) -> RankingResult:
    """MarketSnapshot → RankingResult (순수 계산, 네트워크 없음)."""
    liquidity = compute_liquidity_from_snapshot(snapshot, notional_scale=settings.notional_scale)
    volatility = compute_volatility_from_snapshot(snapshot)
    return RankingResult(
        liquidity=rank_liquidity(liquidity),
        volatility=rank_volatility(volatility),
        liquidity_records=tuple(liquidity),
        volatility_records=tuple(volatility),
    )


class RankingPipeline:
    """유니버스 하나에 대한 liquidity/volatility 랭킹 파이프라인.

    Attributes:
        universe: 검증된 심볼 tuple (첫 번째 = reference)

    Example:
        >>> pipeline = RankingPipeline(DEFAULT_SYMBOLS)
        >>> result = await pipeline.run()
        >>> result.liquidity.symbols[:3]
    """

    def __init__(
        self,
        universe: Iterable[str] | None = None,
        settings: RankerSettings | None = None,
        *,
        client_factory: ClientFactory | None = None,
    ) -> None:
        """RankingPipeline 초기화.

        Args:
            universe: 심볼 목록 (None이면 settings.symbols, 그것도 없으면 기본 유니버스)
            settings: 설정 (None이면 기본 설정)
            client_factory: HTTP 클라이언트 생성 함수 (테스트 주입용)
        """
        self._settings = settings or get_settings()
        self.universe = load_universe(universe if universe is not None else self._settings.symbols)
        self._client_factory = client_factory or _default_client_factory

    async def run(self) -> RankingResult:
        """파이프라인 1회 실행.

        Raises:
            RankerError: 네트워크/파싱/수치 오류 (run 전체 중단)
        """
        started = time.monotonic()
        logger.info(
            "Ranking run started: {} symbols (reference={})",
            len(self.universe),
            self.universe[0],
        )
        try:
            async with self._client_factory(self._settings) as client:
                service = MarketSnapshotService(client, self.universe, self._settings)
                snapshot = await service.fetch_snapshot()
            result = build_result(snapshot, self._settings)
        except RankerError as e:
            add_context_note(e, f"ranking run over {len(self.universe)} symbols")
            logger.error("Ranking run failed: {}", e)
            raise

        logger.success(
            "Ranking run completed in {:.2f}s (least liquid={}, least volatile={})",
            time.monotonic() - started,
            result.liquidity.symbols[-1],
            result.volatility.symbols[-1],
        )
        return result


def run_ranking(
    universe: Iterable[str] | None = None,
    settings: RankerSettings | None = None,
) -> RankingResult:
    """동기 진입점 (asyncio.run)."""
    return asyncio.run(RankingPipeline(universe, settings).run())
