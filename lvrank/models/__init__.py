"""Pydantic models for market data and ranking results."""

from lvrank.models.market import (
    DataKind,
    KlineBar,
    KlineWindow,
    MarketSnapshot,
    OpenInterestReading,
    PriceReading,
)
from lvrank.models.ranking import (
    LiquidityRecord,
    MetricName,
    RankedSeries,
    RankingResult,
    VolatilityRecord,
)

__all__ = [
    "DataKind",
    "KlineBar",
    "KlineWindow",
    "LiquidityRecord",
    "MarketSnapshot",
    "MetricName",
    "OpenInterestReading",
    "PriceReading",
    "RankedSeries",
    "RankingResult",
    "VolatilityRecord",
]
