"""Market Snapshot Service — 세 배치 동시 수집 + 타입 모델 파싱.

Open-interest, price, kline 배치는 서로 독립이므로 동시에 실행합니다.
파싱 결과는 심볼 키 매핑(MarketSnapshot)으로 반환되어, 이후 단계에서
인덱스 기반 join이 필요 없습니다.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from loguru import logger

from lvrank.config.settings import RankerSettings, get_settings
from lvrank.data.fetcher import BatchFetcher, first_leaf_error
from lvrank.data.requests import build_all_request_sets
from lvrank.models.market import (
    DataKind,
    KlineWindow,
    MarketSnapshot,
    OpenInterestReading,
    PriceReading,
)

if TYPE_CHECKING:
    from lvrank.data.client import AsyncBinanceRestClient


class MarketSnapshotService:
    """유니버스 전체의 시장 스냅샷 수집 서비스.

    Example:
        >>> async with AsyncBinanceRestClient() as client:
        ...     service = MarketSnapshotService(client, universe=DEFAULT_SYMBOLS)
        ...     snapshot = await service.fetch_snapshot()
    """

    def __init__(
        self,
        client: AsyncBinanceRestClient,
        universe: tuple[str, ...],
        settings: RankerSettings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._universe = universe
        self._fetcher = BatchFetcher(client, self._settings)

    @property
    def universe(self) -> tuple[str, ...]:
        return self._universe

    async def fetch_snapshot(self) -> MarketSnapshot:
        """세 배치를 동시에 수집하고 파싱.

        Returns:
            MarketSnapshot (심볼 키 매핑)

        Raises:
            RankerError: 어느 배치든 실패하면 나머지 배치를 취소하고 첫 번째 오류 전파
        """
        request_sets = build_all_request_sets(self._universe, self._settings)
        raw: dict[DataKind, list[Any]] = {}

        async def _run(kind: DataKind) -> None:
            raw[kind] = await self._fetcher.fetch(request_sets[kind])

        try:
            async with asyncio.TaskGroup() as tg:
                for kind in DataKind:
                    tg.create_task(_run(kind), name=f"batch:{kind}")
        except BaseExceptionGroup as eg:
            raise first_leaf_error(eg)

        snapshot = self.parse(
            raw[DataKind.OPEN_INTEREST],
            raw[DataKind.PRICE],
            raw[DataKind.KLINE],
        )
        logger.info("Market snapshot ready: {} symbols", len(snapshot.symbols))
        return snapshot

    def parse(
        self,
        open_interest_raw: list[Any],
        price_raw: list[Any],
        kline_raw: list[Any],
    ) -> MarketSnapshot:
        """Raw 응답 리스트 (유니버스 순서) → MarketSnapshot.

        Raises:
            ParseError: 필드 누락, 잘못된 shape, 비숫자 문자열
        """
        symbols = self._universe
        expected_bars = self._settings.kline_limit
        return MarketSnapshot(
            symbols=symbols,
            open_interest={
                s: OpenInterestReading.from_raw(s, body)
                for s, body in zip(symbols, open_interest_raw, strict=True)
            },
            prices={
                s: PriceReading.from_raw(s, body)
                for s, body in zip(symbols, price_raw, strict=True)
            },
            klines={
                s: KlineWindow.from_raw(s, body, expected_bars=expected_bars)
                for s, body in zip(symbols, kline_raw, strict=True)
            },
        )
