"""Batch Fetcher — RequestSet 전체를 동시에 요청하고 입력 순서대로 수집.

Fan-out: 모든 URL을 한 번에 Task로 생성 (동시 in-flight 수는 client semaphore로 제한).
Fan-in: 완료 순서와 무관하게 results[i] ↔ urls[i].

한 요청이라도 실패하면 TaskGroup이 나머지 in-flight 요청을 취소하고
배치 전체가 실패합니다 (partial success 없음).
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any

from lvrank.config.settings import RankerSettings, get_settings
from lvrank.core.exceptions import BatchTimeoutError, RankerError
from lvrank.core.logger import get_context_logger

if TYPE_CHECKING:
    from lvrank.data.client import AsyncBinanceRestClient
    from lvrank.data.requests import RequestSet


def first_leaf_error(group: BaseExceptionGroup) -> BaseException:
    """ExceptionGroup에서 첫 번째 leaf 예외 추출."""
    exc: BaseException = group
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc


class BatchFetcher:
    """RequestSet 단위 동시 수집기.

    Example:
        >>> async with AsyncBinanceRestClient() as client:
        ...     fetcher = BatchFetcher(client)
        ...     bodies = await fetcher.fetch(build_request_set(symbols, DataKind.PRICE))
    """

    def __init__(
        self,
        client: AsyncBinanceRestClient,
        settings: RankerSettings | None = None,
    ) -> None:
        self._client = client
        self._settings = settings or get_settings()

    async def fetch(self, request_set: RequestSet) -> list[Any]:
        """배치 전체를 동시에 요청.

        Args:
            request_set: 요청 묶음

        Returns:
            파싱된 JSON 값 리스트 (len == len(request_set), 같은 순서)

        Raises:
            BatchTimeoutError: batch_timeout 안에 전체가 끝나지 않음
            NetworkError / RateLimitError / ParseError: 개별 요청 실패 (첫 번째 실패)
        """
        kind = str(request_set.kind)
        n = len(request_set)
        if n == 0:
            return []

        results: list[Any] = [None] * n
        log = get_context_logger(kind=kind)

        async def _fetch_one(index: int) -> None:
            symbol = request_set.symbols[index]
            results[index] = await self._client.get_json(
                request_set.urls[index],
                context={"kind": kind, "symbol": symbol},
            )

        log.debug("Batch {} started: {} requests", kind, n)
        started = time.monotonic()

        try:
            async with asyncio.timeout(self._settings.batch_timeout):
                async with asyncio.TaskGroup() as tg:
                    for i in range(n):
                        tg.create_task(_fetch_one(i), name=f"{kind}:{request_set.symbols[i]}")
        except TimeoutError as e:
            log.error("Batch {} exceeded deadline of {:.1f}s", kind, self._settings.batch_timeout)
            raise BatchTimeoutError(
                f"Batch {kind} did not complete within {self._settings.batch_timeout:.1f}s",
                context={"kind": kind, "requests": n},
            ) from e
        except BaseExceptionGroup as eg:
            first = first_leaf_error(eg)
            if isinstance(first, RankerError):
                log.warning(
                    "Batch {} failed ({} error(s)), siblings cancelled: {}",
                    kind,
                    len(eg.exceptions),
                    first,
                )
            raise first

        elapsed = time.monotonic() - started
        log.info("Batch {} completed: {} responses in {:.2f}s", kind, n, elapsed)
        return results
