"""Custom exception hierarchy for the ranking pipeline.

All failures surface as a RankerError subclass so callers can tell
network, parse and numeric failures apart. There is no recovery layer:
any error aborts the run.

Exception Categories:
    - ExchangeError: 네트워크/거래소 응답 오류 (연결, 타임아웃, non-2xx)
    - DataValidationError: 응답 파싱 오류, 수치 계산 오류
    - ConfigurationError: 잘못된 유니버스/설정
"""


class RankerError(Exception):
    """모든 랭킹 파이프라인 예외의 기본 클래스.

    이 예외를 직접 발생시키지 말고, 하위 클래스를 사용하세요.

    Attributes:
        message: 에러 메시지
        context: 추가 컨텍스트 정보 (batch kind, symbol, field 등)
    """

    def __init__(
        self, message: str, *, context: dict[str, object] | None = None
    ) -> None:
        """RankerError 초기화.

        Args:
            message: 에러 메시지
            context: 추가 컨텍스트 정보 (선택)
        """
        super().__init__(message)
        self.message = message
        self.context: dict[str, object] = context or {}

    def __str__(self) -> str:
        """에러 메시지와 컨텍스트를 포함한 문자열 반환."""
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class ConfigurationError(RankerError):
    """설정 오류 (빈 유니버스, 중복 심볼 등)."""


# =============================================================================
# Exchange Errors
# =============================================================================


class ExchangeError(RankerError):
    """거래소 API 관련 오류의 기본 클래스."""


class NetworkError(ExchangeError):
    """네트워크 오류 (연결 실패, 요청 타임아웃, non-2xx 응답).

    Example:
        >>> raise NetworkError(
        ...     "HTTP 503 from binance",
        ...     context={"kind": "kline", "symbol": "BTCUSDT", "status": 503}
        ... )
    """


class BatchTimeoutError(NetworkError):
    """배치 전체 deadline 초과."""


class RateLimitError(ExchangeError):
    """API 레이트 리밋 초과 (HTTP 429).

    Attributes:
        retry_after: 서버가 알려준 대기 시간 (초, 없으면 None)
    """

    def __init__(
        self,
        message: str,
        *,
        retry_after: float | None = None,
        context: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.retry_after = retry_after


# =============================================================================
# Data Validation Errors
# =============================================================================


class DataValidationError(RankerError):
    """데이터 검증 오류의 기본 클래스."""


class ParseError(DataValidationError):
    """응답 파싱 오류 (invalid JSON, 필드 누락, 잘못된 shape, 숫자가 아닌 문자열).

    Example:
        >>> raise ParseError(
        ...     "Kline bar too short",
        ...     context={"kind": "kline", "symbol": "ETHUSDT", "field": "bar[3]"}
        ... )
    """


class NumericError(DataValidationError):
    """수치 계산 오류 (0으로 나누기, NaN/inf 발생).

    silent inf/NaN 전파를 막기 위해 run 전체를 중단합니다.
    """


# =============================================================================
# Utility Functions
# =============================================================================


def add_context_note(exc: Exception, note: str) -> None:
    """예외에 컨텍스트 노트 추가 (Python 3.11+ add_note).

    Args:
        exc: 예외 객체
        note: 추가할 노트 문자열
    """
    exc.add_note(note)
