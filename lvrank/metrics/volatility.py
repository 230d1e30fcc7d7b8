"""Realized Volatility — 평균 절대 open-close 변동률의 상대 비율.

swing = |open - close| / close × 100   (캔들별, %)
mean_swing_i = mean(swing) over lookback window (기본 2h × 168 = 14일)
relative_volatility_i = max(mean_swing) / mean_swing_i

값이 클수록 가장 변동성이 큰 심볼보다 변동성이 *낮음* (inverse scale).
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

import numpy as np
from loguru import logger

from lvrank.core.exceptions import ConfigurationError, NumericError
from lvrank.models.market import KlineWindow, MarketSnapshot
from lvrank.models.ranking import VolatilityRecord


def mean_abs_swing_pct(window: KlineWindow) -> float:
    """캔들별 절대 변동률(%)의 평균.

    Raises:
        NumericError: 빈 윈도우, close == 0 캔들
    """
    if not window.bars:
        raise NumericError("Empty kline window", context={"symbol": window.symbol})

    opens = np.fromiter((b.open for b in window.bars), dtype=np.float64, count=len(window.bars))
    closes = np.fromiter((b.close for b in window.bars), dtype=np.float64, count=len(window.bars))

    zero_close = np.flatnonzero(closes == 0)
    if zero_close.size:
        raise NumericError(
            "Kline close price is zero",
            context={"symbol": window.symbol, "field": f"bar[{int(zero_close[0])}].close"},
        )

    swings = np.abs(opens - closes) / closes * 100.0
    return float(swings.mean())


def compute_volatility(
    symbols: Sequence[str],
    klines: Mapping[str, KlineWindow],
) -> list[VolatilityRecord]:
    """유니버스 전체의 상대 변동성 계산.

    Args:
        symbols: 유니버스
        klines: symbol → KlineWindow

    Returns:
        VolatilityRecord 리스트 (유니버스 순서)

    Raises:
        ConfigurationError: 빈 유니버스, 또는 심볼 데이터 누락
        NumericError: mean swing == 0 (완전히 flat한 윈도우), 비유한 결과
    """
    if not symbols:
        raise ConfigurationError("Cannot compute volatility for an empty universe")

    missing = [s for s in symbols if s not in klines]
    if missing:
        raise ConfigurationError("Klines missing for symbols", context={"symbols": missing})

    mean_swings = {s: mean_abs_swing_pct(klines[s]) for s in symbols}
    max_swing = max(mean_swings.values())
    most_volatile = max(mean_swings, key=mean_swings.__getitem__)
    logger.debug("Max mean swing {}: {:.4f}%", most_volatile, max_swing)

    records: list[VolatilityRecord] = []
    for symbol in symbols:
        mean_swing = mean_swings[symbol]
        if mean_swing == 0:
            raise NumericError(
                "Zero mean swing (flat kline window), relative volatility is undefined",
                context={"symbol": symbol, "bars": len(klines[symbol].bars)},
            )
        relative = max_swing / mean_swing
        if not math.isfinite(relative):
            raise NumericError(
                "Non-finite relative volatility",
                context={"symbol": symbol, "mean_swing": mean_swing, "max_swing": max_swing},
            )
        records.append(
            VolatilityRecord(
                symbol=symbol,
                mean_swing_pct=mean_swing,
                relative_volatility=relative,
            )
        )
    return records


def compute_volatility_from_snapshot(snapshot: MarketSnapshot) -> list[VolatilityRecord]:
    """MarketSnapshot 기반 상대 변동성 계산."""
    return compute_volatility(snapshot.symbols, snapshot.klines)
