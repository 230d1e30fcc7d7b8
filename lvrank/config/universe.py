"""Symbol Universe — 랭킹 대상 USDT 페어 상수 정의.

첫 번째 심볼이 liquidity 계산의 reference 심볼입니다.
순서는 모든 배치에서 보존됩니다.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from lvrank.core.exceptions import ConfigurationError

# ---------------------------------------------------------------------------
# 기본 유니버스 (BTCUSDT = reference)
# ---------------------------------------------------------------------------
DEFAULT_SYMBOLS: tuple[str, ...] = (
    "BTCUSDT",
    "ETHUSDT",
    "BCHUSDT",
    "XRPUSDT",
    "EOSUSDT",
    "LTCUSDT",
    "TRXUSDT",
    "ETCUSDT",
    "LINKUSDT",
    "XLMUSDT",
    "ADAUSDT",
    "XMRUSDT",
    "DASHUSDT",
    "ZECUSDT",
    "XTZUSDT",
    "BNBUSDT",
    "ATOMUSDT",
    "ONTUSDT",
    "IOTAUSDT",
    "BATUSDT",
    "VETUSDT",
    "NEOUSDT",
    "QTUMUSDT",
    "IOSTUSDT",
    "THETAUSDT",
    "ALGOUSDT",
    "ZILUSDT",
    "BALUSDT",
    "SUSHIUSDT",
    "CRVUSDT",
    "KNCUSDT",
    "ZRXUSDT",
    "COMPUSDT",
    "OMGUSDT",
    "DOGEUSDT",
    "SXPUSDT",
    "LENDUSDT",
    "KAVAUSDT",
    "BANDUSDT",
    "RLCUSDT",
    "WAVESUSDT",
    "MKRUSDT",
    "SNXUSDT",
    "DOTUSDT",
)

REFERENCE_SYMBOL = DEFAULT_SYMBOLS[0]


def load_universe(symbols: Iterable[str] | None = None) -> tuple[str, ...]:
    """유니버스를 검증된 tuple로 반환.

    Args:
        symbols: 사용할 심볼 목록 (None이면 DEFAULT_SYMBOLS)

    Returns:
        대문자로 정규화된 심볼 tuple (입력 순서 유지)

    Raises:
        ConfigurationError: 빈 목록, 빈 문자열, 중복 심볼
    """
    if symbols is None:
        return DEFAULT_SYMBOLS

    universe = tuple(s.strip().upper() for s in symbols)
    if not universe:
        raise ConfigurationError("Symbol universe is empty")

    if any(not s for s in universe):
        raise ConfigurationError(
            "Symbol universe contains a blank symbol",
            context={"symbols": list(universe)},
        )

    dupes = sorted(s for s, n in Counter(universe).items() if n > 1)
    if dupes:
        raise ConfigurationError(
            "Symbol universe contains duplicates",
            context={"duplicates": dupes},
        )
    return universe
