"""Metric extractors (liquidity, volatility) and the ranker."""

from lvrank.metrics.liquidity import (
    DEFAULT_NOTIONAL_SCALE,
    compute_liquidity,
    compute_liquidity_from_snapshot,
    compute_notional,
)
from lvrank.metrics.ranker import rank, rank_liquidity, rank_volatility
from lvrank.metrics.volatility import (
    compute_volatility,
    compute_volatility_from_snapshot,
    mean_abs_swing_pct,
)

__all__ = [
    "DEFAULT_NOTIONAL_SCALE",
    "compute_liquidity",
    "compute_liquidity_from_snapshot",
    "compute_notional",
    "compute_volatility",
    "compute_volatility_from_snapshot",
    "mean_abs_swing_pct",
    "rank",
    "rank_liquidity",
    "rank_volatility",
]
