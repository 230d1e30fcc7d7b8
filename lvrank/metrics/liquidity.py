"""Open-Interest Liquidity — reference 대비 USDT notional 비율.

notional_i = open_interest_i × price_i / notional_scale (기본 1e6, 백만 USDT)
relative_liquidity_i = notional_ref / notional_i

값이 클수록 reference보다 유동성이 *낮음* (inverse scale).
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

from loguru import logger

from lvrank.core.exceptions import ConfigurationError, NumericError
from lvrank.models.market import MarketSnapshot, OpenInterestReading, PriceReading
from lvrank.models.ranking import LiquidityRecord

DEFAULT_NOTIONAL_SCALE = 1_000_000.0


def compute_notional(
    open_interest: float,
    price: float,
    notional_scale: float = DEFAULT_NOTIONAL_SCALE,
) -> float:
    """미결제약정을 USDT notional (scale 단위)로 변환."""
    return open_interest * price / notional_scale


def compute_liquidity(
    symbols: Sequence[str],
    open_interest: Mapping[str, OpenInterestReading],
    prices: Mapping[str, PriceReading],
    *,
    notional_scale: float = DEFAULT_NOTIONAL_SCALE,
    reference: str | None = None,
) -> list[LiquidityRecord]:
    """유니버스 전체의 상대 유동성 계산.

    Args:
        symbols: 유니버스 (첫 번째 = reference)
        open_interest: symbol → OpenInterestReading
        prices: symbol → PriceReading
        notional_scale: notional 스케일
        reference: 기준 심볼 (None이면 symbols[0])

    Returns:
        LiquidityRecord 리스트 (유니버스 순서)

    Raises:
        ConfigurationError: 빈 유니버스, 심볼 데이터 누락, 유니버스 밖의 reference
        NumericError: notional이 0 또는 비유한(overflow)이거나 결과가 유한하지 않음
    """
    if not symbols:
        raise ConfigurationError("Cannot compute liquidity for an empty universe")

    missing = [s for s in symbols if s not in open_interest or s not in prices]
    if missing:
        raise ConfigurationError(
            "Open interest or price missing for symbols",
            context={"symbols": missing},
        )

    if reference is None:
        reference = symbols[0]
    elif reference not in symbols:
        raise ConfigurationError(
            "Reference symbol is not part of the universe",
            context={"reference": reference},
        )

    notionals: dict[str, float] = {}
    for symbol in symbols:
        notional = compute_notional(
            open_interest[symbol].open_interest, prices[symbol].price, notional_scale
        )
        if not math.isfinite(notional):
            raise NumericError(
                "Non-finite open-interest notional",
                context={
                    "symbol": symbol,
                    "open_interest": open_interest[symbol].open_interest,
                    "price": prices[symbol].price,
                },
            )
        notionals[symbol] = notional

    ref_notional = notionals[reference]
    logger.debug("Reference notional {}: {:.6f}M USDT", reference, ref_notional)

    records: list[LiquidityRecord] = []
    for symbol in symbols:
        notional = notionals[symbol]
        if notional == 0:
            raise NumericError(
                "Zero open-interest notional, relative liquidity is undefined",
                context={
                    "symbol": symbol,
                    "open_interest": open_interest[symbol].open_interest,
                    "price": prices[symbol].price,
                },
            )
        relative = ref_notional / notional
        if not math.isfinite(relative):
            raise NumericError(
                "Non-finite relative liquidity",
                context={"symbol": symbol, "notional": notional, "reference": ref_notional},
            )
        records.append(
            LiquidityRecord(symbol=symbol, notional_musdt=notional, relative_liquidity=relative)
        )
    return records


def compute_liquidity_from_snapshot(
    snapshot: MarketSnapshot,
    *,
    notional_scale: float = DEFAULT_NOTIONAL_SCALE,
) -> list[LiquidityRecord]:
    """MarketSnapshot 기반 상대 유동성 계산."""
    return compute_liquidity(
        snapshot.symbols,
        snapshot.open_interest,
        snapshot.prices,
        notional_scale=notional_scale,
        reference=snapshot.reference_symbol,
    )
