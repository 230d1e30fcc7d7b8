"""Pydantic Settings for configuration management.

All settings are loaded from environment variables (LVRANK_ prefix)
and/or a .env file with type validation.

Features:
    - Binance endpoint base URLs (overridable for tests)
    - Kline window (interval/limit) and notional scale
    - Per-request timeout, batch deadline, concurrency cap
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RankerSettings(BaseSettings):
    """랭킹 파이프라인 설정.

    Environment Variables:
        - LVRANK_FUTURES_BASE_URL: USDT-M futures REST base URL
        - LVRANK_SPOT_BASE_URL: Spot REST base URL
        - LVRANK_REQUEST_TIMEOUT: 요청당 타임아웃 (초)
        - LVRANK_BATCH_TIMEOUT: 배치 전체 deadline (초)
        - LVRANK_MAX_CONCURRENCY: 동시 요청 상한
        - LVRANK_SYMBOLS: 유니버스 override (JSON list)

    Example:
        >>> settings = get_settings()
        >>> settings.kline_limit
        168
    """

    model_config = SettingsConfigDict(
        env_prefix="LVRANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Endpoints
    # ==========================================================================
    futures_base_url: str = Field(
        default="https://fapi.binance.com",
        description="Binance USDT-M futures REST base URL",
    )
    spot_base_url: str = Field(
        default="https://api.binance.com",
        description="Binance spot REST base URL",
    )

    # ==========================================================================
    # Metric Parameters
    # ==========================================================================
    kline_interval: str = Field(
        default="2h",
        description="캔들 간격",
    )
    kline_limit: int = Field(
        default=168,
        ge=1,
        le=1500,
        description="캔들 수 (2h * 168 = 14일)",
    )
    notional_scale: float = Field(
        default=1_000_000.0,
        gt=0,
        description="USDT notional 스케일 (백만 USDT 단위)",
    )

    # ==========================================================================
    # Concurrency / Timeouts
    # ==========================================================================
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="요청당 타임아웃 (초)",
    )
    batch_timeout: float = Field(
        default=60.0,
        gt=0,
        description="배치 전체 deadline (초)",
    )
    max_concurrency: int = Field(
        default=20,
        ge=1,
        le=200,
        description="동시 in-flight 요청 상한",
    )

    # ==========================================================================
    # Universe / Paths
    # ==========================================================================
    symbols: list[str] | None = Field(
        default=None,
        description="유니버스 override (None이면 기본 유니버스)",
    )
    log_dir: Path = Field(
        default=Path("logs"),
        description="로그 파일 저장 경로",
    )

    @field_validator("futures_base_url", "spot_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Base URL 끝의 '/' 제거."""
        return v.rstrip("/")


@lru_cache
def get_settings() -> RankerSettings:
    """설정 싱글톤 인스턴스 반환.

    Returns:
        RankerSettings 인스턴스
    """
    return RankerSettings()


def clear_settings_cache() -> None:
    """설정 캐시 초기화 (테스트용)."""
    get_settings.cache_clear()
