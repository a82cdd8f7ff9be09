"""Resilient HTTP Client — wraps httpx.AsyncClient with retry, backoff, and error mapping.

Invariants:
    - Rate limits (429): exponential backoff with jitter, respects Retry-After header
    - Transient errors (5xx, connection, timeout): max_retries retries with exponential backoff
    - Other statuses (2xx, 3xx, 4xx except 429) returned to the caller untouched
    - Exhausted retries raise SkinRequestError(TRANSIENT_FAILURE)

Design Decisions:
    - Wrapper over raw client: upstream clients only interpret payloads
    - ±25% jitter on backoff: prevents thundering herd on shared rate limits
    - httpx.AsyncClient injectable: tests pass one built on httpx.MockTransport
"""

import asyncio
import logging
import random

import httpx

from skincache.core.domain_types import SkinErrorKind
from skincache.core.errors import ErrorContext, SkinRequestError

logger = logging.getLogger(__name__)

_RATE_LIMITED = 429


class ResilientHttpClient:
    """httpx client with retry on rate limits and transient failures."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 10.0,
        max_retries: int = 3,
        base_delay_ms: int = 500,
        max_delay_ms: int = 10_000,
        user_agent: str = "SkinCache",
    ):
        self.client = client or httpx.AsyncClient(
            timeout=timeout_seconds, headers={"User-Agent": user_agent},
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def request(
        self,
        method: str,
        url: str,
        context: ErrorContext | None = None,
        **kwargs,
    ) -> httpx.Response:
        """Send a request, retrying transient failures."""
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.request(method, url, **kwargs)
            except httpx.TransportError as e:
                await self._backoff_or_fail(
                    f"{type(e).__name__}: {e}", attempt, context, None,
                )
                continue

            if response.status_code == _RATE_LIMITED:
                await self._backoff_or_fail(
                    "rate limited", attempt, context,
                    self._extract_retry_after(response),
                )
                continue
            if response.status_code >= 500:
                await self._backoff_or_fail(
                    f"HTTP {response.status_code}", attempt, context, None,
                )
                continue
            return response

        # unreachable: _backoff_or_fail raises on the last attempt
        raise SkinRequestError(SkinErrorKind.TRANSIENT_FAILURE, context=context)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _backoff_or_fail(
        self,
        reason: str,
        attempt: int,
        context: ErrorContext | None,
        retry_after_ms: int | None,
    ) -> None:
        if attempt >= self.max_retries:
            logger.error(
                f"Upstream failed after {attempt + 1} attempts: {reason}",
                extra={"attempt": attempt},
            )
            ctx = context or ErrorContext()
            ctx.retry_after_ms = retry_after_ms
            raise SkinRequestError(
                SkinErrorKind.TRANSIENT_FAILURE,
                context=ctx,
            )
        delay = retry_after_ms or self._calculate_backoff(attempt)
        logger.warning(
            f"Upstream transient failure ({reason}), retrying in {delay}ms",
            extra={"attempt": attempt},
        )
        await asyncio.sleep(delay / 1000)

    def _calculate_backoff(self, attempt: int) -> int:
        delay = min(self.base_delay_ms * (2 ** attempt), self.max_delay_ms)
        jitter = delay * 0.25 * (2 * random.random() - 1)
        return max(0, int(delay + jitter))

    @staticmethod
    def _extract_retry_after(response: httpx.Response) -> int | None:
        value = response.headers.get("retry-after")
        if value is None:
            return None
        try:
            return int(float(value) * 1000)
        except ValueError:
            return None
