"""Data acquisition: request building, concurrent batch fetching, snapshot parsing.

Exports:
    - AsyncBinanceRestClient: Shared httpx client (timeout + concurrency cap)
    - BatchFetcher: Order-preserving concurrent fan-out/fan-in
    - MarketSnapshotService: Three batches → symbol-keyed MarketSnapshot
    - RequestSet / build_request_set: Per-kind URL construction
"""

from lvrank.data.client import AsyncBinanceRestClient
from lvrank.data.fetcher import BatchFetcher
from lvrank.data.requests import RequestSet, build_all_request_sets, build_request_set
from lvrank.data.service import MarketSnapshotService

__all__ = [
    "AsyncBinanceRestClient",
    "BatchFetcher",
    "MarketSnapshotService",
    "RequestSet",
    "build_all_request_sets",
    "build_request_set",
]
