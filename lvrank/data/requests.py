"""Request Builder — 데이터 종류별 Binance REST URL 생성.

네트워크 접근 없이 문자열만 조립합니다. urls[i]는 항상 symbols[i]에 대응합니다.
"""

from __future__ import annotations

from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, model_validator

from lvrank.config.settings import RankerSettings, get_settings
from lvrank.models.market import DataKind

OPEN_INTEREST_PATH = "/fapi/v1/openInterest"
KLINES_PATH = "/fapi/v1/klines"
TICKER_PRICE_PATH = "/api/v3/ticker/price"


class RequestSet(BaseModel):
    """한 데이터 종류의 요청 묶음 (유니버스 순서 그대로).

    Attributes:
        kind: 데이터 종류
        symbols: 유니버스
        urls: 심볼별 URL (같은 인덱스)
    """

    model_config = ConfigDict(frozen=True)

    kind: DataKind
    symbols: tuple[str, ...]
    urls: tuple[str, ...]

    @model_validator(mode="after")
    def check_aligned(self) -> RequestSet:
        if len(self.symbols) != len(self.urls):
            msg = f"{len(self.urls)} urls for {len(self.symbols)} symbols"
            raise ValueError(msg)
        return self

    def __len__(self) -> int:
        return len(self.urls)


def build_url(symbol: str, kind: DataKind, settings: RankerSettings) -> str:
    """심볼 하나의 URL 생성.

    Example:
        >>> build_url("BTCUSDT", DataKind.KLINE, get_settings())
        'https://fapi.binance.com/fapi/v1/klines?symbol=BTCUSDT&interval=2h&limit=168'
    """
    match kind:
        case DataKind.OPEN_INTEREST:
            return f"{settings.futures_base_url}{OPEN_INTEREST_PATH}?{urlencode({'symbol': symbol})}"
        case DataKind.KLINE:
            query = urlencode(
                {
                    "symbol": symbol,
                    "interval": settings.kline_interval,
                    "limit": settings.kline_limit,
                }
            )
            return f"{settings.futures_base_url}{KLINES_PATH}?{query}"
        case DataKind.PRICE:
            return f"{settings.spot_base_url}{TICKER_PRICE_PATH}?{urlencode({'symbol': symbol})}"


def build_request_set(
    symbols: tuple[str, ...] | list[str],
    kind: DataKind,
    settings: RankerSettings | None = None,
) -> RequestSet:
    """유니버스 전체에 대한 RequestSet 생성.

    Args:
        symbols: 유니버스 (순서 보존)
        kind: 데이터 종류
        settings: 설정 (None이면 기본 설정)

    Returns:
        RequestSet (urls[i] ↔ symbols[i])
    """
    settings = settings or get_settings()
    symbols = tuple(symbols)
    return RequestSet(
        kind=kind,
        symbols=symbols,
        urls=tuple(build_url(s, kind, settings) for s in symbols),
    )


def build_all_request_sets(
    symbols: tuple[str, ...] | list[str],
    settings: RankerSettings | None = None,
) -> dict[DataKind, RequestSet]:
    """세 가지 데이터 종류의 RequestSet을 한 번에 생성."""
    settings = settings or get_settings()
    return {kind: build_request_set(symbols, kind, settings) for kind in DataKind}
