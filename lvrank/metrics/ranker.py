"""Ranker — (symbol, value) 레코드를 값 기준 오름차순 정렬.

NaN/inf 값은 정렬 전에 NumericError로 거부합니다.
동점의 상대 순서는 보장하지 않습니다.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Protocol

from lvrank.core.exceptions import NumericError
from lvrank.models.ranking import (
    LiquidityRecord,
    MetricName,
    RankedSeries,
    VolatilityRecord,
)


class MetricRecord(Protocol):
    @property
    def symbol(self) -> str: ...

    @property
    def value(self) -> float: ...


def rank(records: Sequence[MetricRecord], metric: MetricName) -> RankedSeries:
    """레코드를 value 오름차순으로 정렬한 RankedSeries 반환.

    Args:
        records: symbol/value를 가진 레코드
        metric: 메트릭 이름

    Returns:
        RankedSeries (symbols, values 병렬, 오름차순)

    Raises:
        NumericError: NaN 또는 inf 값 포함
    """
    for record in records:
        if not math.isfinite(record.value):
            raise NumericError(
                f"Cannot rank non-finite {metric} value",
                context={"symbol": record.symbol, "value": record.value},
            )

    ordered = sorted(records, key=lambda r: r.value)
    return RankedSeries(
        metric=metric,
        symbols=tuple(r.symbol for r in ordered),
        values=tuple(r.value for r in ordered),
    )


def rank_liquidity(records: Sequence[LiquidityRecord]) -> RankedSeries:
    return rank(records, MetricName.LIQUIDITY)


def rank_volatility(records: Sequence[VolatilityRecord]) -> RankedSeries:
    return rank(records, MetricName.VOLATILITY)
