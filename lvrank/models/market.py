"""Market data schemas for Binance REST responses.

Binance returns numeric fields as strings ("openInterest": "8123.402").
Every raw JSON value passes through these frozen models before any metric
is computed; shape or type mismatches become ParseError with the batch kind,
symbol and field attached.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lvrank.core.exceptions import ParseError

# Binance kline array index
KLINE_OPEN_INDEX = 1
KLINE_CLOSE_INDEX = 4


class DataKind(StrEnum):
    """배치 데이터 종류."""

    OPEN_INTEREST = "open_interest"
    KLINE = "kline"
    PRICE = "price"


def _validation_to_parse_error(
    exc: ValidationError, kind: DataKind, symbol: str
) -> ParseError:
    """Pydantic ValidationError → ParseError (첫 번째 오류 필드 기준)."""
    first = exc.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
    return ParseError(
        f"Invalid {kind} response: {first.get('msg', 'validation failed')}",
        context={"kind": str(kind), "symbol": symbol, "field": field},
    )


def _require_object(raw: Any, kind: DataKind, symbol: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ParseError(
            f"Expected JSON object for {kind}, got {type(raw).__name__}",
            context={"kind": str(kind), "symbol": symbol, "field": "<root>"},
        )
    return raw


def _require_numeric_string(
    body: dict[str, Any], key: str, kind: DataKind, symbol: str
) -> str:
    """Binance 숫자 필드는 문자열로 옴. bool/number/null은 shape 오류."""
    value = body.get(key)
    if not isinstance(value, str):
        reason = "missing" if value is None else f"{type(value).__name__}, expected numeric string"
        raise ParseError(
            f"Invalid {kind} response: field {key} is {reason}",
            context={"kind": str(kind), "symbol": symbol, "field": key},
        )
    return value


class OpenInterestReading(BaseModel):
    """현재 미결제약정 (GET /fapi/v1/openInterest).

    Attributes:
        symbol: 거래 심볼 (예: "BTCUSDT")
        open_interest: 미결제약정 (계약 수량, base asset 단위)
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, populate_by_name=True)

    symbol: str
    open_interest: float = Field(..., ge=0, alias="openInterest")

    @classmethod
    def from_raw(cls, symbol: str, raw: Any) -> OpenInterestReading:
        """Raw JSON object → OpenInterestReading.

        Raises:
            ParseError: 객체가 아니거나 openInterest 필드 누락/비숫자
        """
        body = _require_object(raw, DataKind.OPEN_INTEREST, symbol)
        try:
            value = _require_numeric_string(body, "openInterest", DataKind.OPEN_INTEREST, symbol)
            return cls.model_validate({"symbol": symbol, "openInterest": value})
        except ValidationError as e:
            raise _validation_to_parse_error(e, DataKind.OPEN_INTEREST, symbol) from e


class PriceReading(BaseModel):
    """현물 현재가 (GET /api/v3/ticker/price).

    Attributes:
        symbol: 거래 심볼
        price: 현재가 (USDT)
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    symbol: str
    price: float = Field(..., ge=0)

    @classmethod
    def from_raw(cls, symbol: str, raw: Any) -> PriceReading:
        """Raw JSON object → PriceReading.

        Raises:
            ParseError: 객체가 아니거나 price 필드 누락/비숫자
        """
        body = _require_object(raw, DataKind.PRICE, symbol)
        try:
            value = _require_numeric_string(body, "price", DataKind.PRICE, symbol)
            return cls.model_validate({"symbol": symbol, "price": value})
        except ValidationError as e:
            raise _validation_to_parse_error(e, DataKind.PRICE, symbol) from e


class KlineBar(BaseModel):
    """단일 캔들의 open/close.

    Binance kline 배열: [open_time, open, high, low, close, volume, ...]
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    open: float = Field(..., ge=0)
    close: float = Field(..., ge=0)


class KlineWindow(BaseModel):
    """심볼 하나의 lookback 캔들 윈도우 (GET /fapi/v1/klines).

    Attributes:
        symbol: 거래 심볼
        bars: 시간순 캔들 tuple
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    bars: tuple[KlineBar, ...]

    @classmethod
    def from_raw(cls, symbol: str, raw: Any, *, expected_bars: int | None = None) -> KlineWindow:
        """Raw JSON array → KlineWindow.

        Args:
            symbol: 거래 심볼
            raw: 파싱된 JSON (bar 배열의 배열)
            expected_bars: 기대 캔들 수 (None이면 검사 생략)

        Raises:
            ParseError: 배열이 아님, 캔들 수 불일치, bar 길이 < 5, 비숫자 가격
        """
        ctx: dict[str, object] = {"kind": str(DataKind.KLINE), "symbol": symbol}
        if not isinstance(raw, list):
            raise ParseError(
                f"Expected JSON array of klines, got {type(raw).__name__}",
                context={**ctx, "field": "<root>"},
            )
        if expected_bars is not None and len(raw) != expected_bars:
            raise ParseError(
                f"Expected {expected_bars} klines, got {len(raw)}",
                context={**ctx, "field": "<root>"},
            )

        bars: list[KlineBar] = []
        for i, item in enumerate(raw):
            if not isinstance(item, list) or len(item) <= KLINE_CLOSE_INDEX:
                raise ParseError(
                    "Kline bar is not an array of at least 5 elements",
                    context={**ctx, "field": f"bar[{i}]"},
                )
            open_raw = item[KLINE_OPEN_INDEX]
            close_raw = item[KLINE_CLOSE_INDEX]
            if not isinstance(open_raw, str) or not isinstance(close_raw, str):
                raise ParseError(
                    "Kline open/close must be numeric strings",
                    context={**ctx, "field": f"bar[{i}]"},
                )
            try:
                bars.append(KlineBar(open=open_raw, close=close_raw))  # type: ignore[arg-type]
            except ValidationError as e:
                err = _validation_to_parse_error(e, DataKind.KLINE, symbol)
                err.context["field"] = f"bar[{i}].{err.context['field']}"
                raise err from e

        return cls(symbol=symbol, bars=tuple(bars))


class MarketSnapshot(BaseModel):
    """한 번의 run에서 수집한 전체 시장 데이터 (심볼 키 매핑).

    Attributes:
        symbols: 유니버스 (순서 = reference 우선)
        open_interest: symbol → OpenInterestReading
        prices: symbol → PriceReading
        klines: symbol → KlineWindow
    """

    model_config = ConfigDict(frozen=True)

    symbols: tuple[str, ...]
    open_interest: dict[str, OpenInterestReading]
    prices: dict[str, PriceReading]
    klines: dict[str, KlineWindow]

    @property
    def reference_symbol(self) -> str:
        """Liquidity reference 심볼 (유니버스 첫 번째)."""
        return self.symbols[0]
