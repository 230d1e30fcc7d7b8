"""Async HTTP client for Binance public REST endpoints.

Wraps a single shared httpx.AsyncClient with a per-request timeout and a
concurrency cap. There is no retry layer: every failure is mapped to a
typed RankerError and returned to the caller.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from loguru import logger

from lvrank.config.settings import RankerSettings, get_settings
from lvrank.core.exceptions import NetworkError, ParseError, RateLimitError

# HTTP status codes
HTTP_TOO_MANY_REQUESTS = 429
HTTP_IP_BANNED = 418

_ERROR_BODY_PREVIEW = 200


def _parse_retry_after(response: httpx.Response) -> float | None:
    """Retry-After 헤더 (초) 파싱, 없거나 숫자가 아니면 None."""
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class AsyncBinanceRestClient:
    """Binance REST 비동기 클라이언트 (인증 없음).

    모든 동시 요청이 하나의 httpx.AsyncClient를 공유합니다 (read-only).
    asyncio.Semaphore로 동시 in-flight 요청 수를 제한합니다.

    Example:
        >>> async with AsyncBinanceRestClient() as client:
        ...     body = await client.get_json("https://api.binance.com/api/v3/ticker/price?symbol=BTCUSDT")
    """

    def __init__(
        self,
        settings: RankerSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            settings: 설정 (None이면 기본 설정)
            transport: httpx transport override (테스트용 MockTransport 등)
        """
        self._settings = settings or get_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._semaphore = asyncio.Semaphore(self._settings.max_concurrency)

    @property
    def max_concurrency(self) -> int:
        return self._settings.max_concurrency

    async def __aenter__(self) -> AsyncBinanceRestClient:
        """Enter async context: create httpx client."""
        self._client = httpx.AsyncClient(
            http2=self._transport is None,
            timeout=httpx.Timeout(self._settings.request_timeout),
            limits=httpx.Limits(max_connections=self._settings.max_concurrency),
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        """Exit async context: close httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_json(
        self,
        url: str,
        *,
        context: dict[str, object] | None = None,
    ) -> Any:
        """GET 요청 후 body를 JSON으로 파싱.

        Args:
            url: Request URL
            context: 에러에 첨부할 컨텍스트 (kind, symbol 등)

        Returns:
            파싱된 JSON 값

        Raises:
            RuntimeError: Client not initialized (use async with)
            RateLimitError: HTTP 429/418
            NetworkError: 연결 실패, 타임아웃, non-2xx
            ParseError: body가 유효한 JSON이 아님
        """
        if self._client is None:
            msg = "Client not initialized. Use 'async with AsyncBinanceRestClient(...)' context manager."
            raise RuntimeError(msg)

        ctx: dict[str, object] = {**(context or {}), "url": url}

        async with self._semaphore:
            try:
                response = await self._client.get(url)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                body = e.response.text[:_ERROR_BODY_PREVIEW]
                if status in (HTTP_TOO_MANY_REQUESTS, HTTP_IP_BANNED):
                    raise RateLimitError(
                        f"Rate limited by binance (HTTP {status})",
                        retry_after=_parse_retry_after(e.response),
                        context={**ctx, "status": status},
                    ) from e
                raise NetworkError(
                    f"HTTP {status} from binance",
                    context={**ctx, "status": status, "body": body},
                ) from e
            except httpx.TimeoutException as e:
                raise NetworkError(
                    f"Request timed out after {self._settings.request_timeout:.1f}s",
                    context=ctx,
                ) from e
            except httpx.HTTPError as e:
                raise NetworkError(
                    f"Request failed: {e.__class__.__name__}: {e}",
                    context=ctx,
                ) from e

        try:
            return response.json()
        except ValueError as e:
            logger.debug("Non-JSON body from {}: {!r}", url, response.text[:_ERROR_BODY_PREVIEW])
            raise ParseError("Response body is not valid JSON", context=ctx) from e
