"""Configuration types for resilient HTTP clients."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 3
    backoff_factor: float = 0.5
    max_backoff_wait: float = 10.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = field(
        default_factory=lambda: frozenset({"GET", "HEAD", "OPTIONS"})
    )
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )
    backoff_jitter: float = 1.0


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    """Retry, rate-limit and timeout settings of one remote service.

    The default policy retries only idempotent methods, so a match creation
    POST is sent once.
    """

    base_url: str
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
