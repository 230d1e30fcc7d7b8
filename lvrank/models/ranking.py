"""Metric record and ranking result models.

Both metrics are inverse scales: a larger relative_liquidity means the
symbol is *less* liquid than the reference, a larger relative_volatility
means it is *less* volatile than the most volatile symbol.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator


class MetricName(StrEnum):
    """랭킹 메트릭 이름."""

    LIQUIDITY = "liquidity"
    VOLATILITY = "volatility"


class LiquidityRecord(BaseModel):
    """Open-interest 기반 상대 유동성.

    Attributes:
        symbol: 거래 심볼
        notional_musdt: OI × price / 1e6 (백만 USDT)
        relative_liquidity: reference notional / 이 심볼 notional
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    notional_musdt: float
    relative_liquidity: float

    @property
    def value(self) -> float:
        return self.relative_liquidity


class VolatilityRecord(BaseModel):
    """Realized volatility (평균 절대 open-close 변동률) 기반 상대 변동성.

    Attributes:
        symbol: 거래 심볼
        mean_swing_pct: 캔들별 |open - close| / close * 100 의 평균
        relative_volatility: 최대 mean swing / 이 심볼 mean swing
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    mean_swing_pct: float
    relative_volatility: float

    @property
    def value(self) -> float:
        return self.relative_volatility


class RankedSeries(BaseModel):
    """오름차순 정렬된 (symbol, value) 병렬 시퀀스.

    Presentation 단계로 그대로 전달됩니다.
    """

    model_config = ConfigDict(frozen=True)

    metric: MetricName
    symbols: tuple[str, ...]
    values: tuple[float, ...]

    @model_validator(mode="after")
    def check_aligned(self) -> RankedSeries:
        if len(self.symbols) != len(self.values):
            msg = f"symbols ({len(self.symbols)}) and values ({len(self.values)}) differ in length"
            raise ValueError(msg)
        return self

    def __len__(self) -> int:
        return len(self.symbols)

    def pairs(self) -> list[tuple[str, float]]:
        """[(symbol, value), ...] 순서 그대로."""
        return list(zip(self.symbols, self.values, strict=True))


class RankingResult(BaseModel):
    """한 번의 run 결과 (두 랭킹 + 원본 레코드)."""

    model_config = ConfigDict(frozen=True)

    liquidity: RankedSeries
    volatility: RankedSeries
    liquidity_records: tuple[LiquidityRecord, ...]
    volatility_records: tuple[VolatilityRecord, ...]
