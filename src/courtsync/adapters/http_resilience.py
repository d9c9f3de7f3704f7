"""Retrying, rate-limited ``httpx`` client used by the scoreboard adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

from courtsync.config.http_resilience import RateLimit, ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

__all__ = [
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
]


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


class ResilientClient:
    """Async client that retries per ``config.retry`` and honours the rate limit.

    ``transport`` replaces the network transport underneath the retry layer.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            transport=RetryTransport(transport=transport, retry=build_retry(config.retry)),
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self._client.aclose()

    async def get(self, path: str, *, params: Mapping[str, str] | None = None) -> httpx.Response:
        return await self._send("GET", path, params=params)

    async def post(self, path: str, *, data: Mapping[str, str] | None = None) -> httpx.Response:
        return await self._send("POST", path, data=data)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        if self._limiter is None:
            return await self._client.request(method, path, params=params, data=data)
        async with self._limiter:
            return await self._client.request(method, path, params=params, data=data)
