"""Bounded retry with exponential backoff for outbound HTTP calls."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import httpx

from stylefinder.integrations.errors import IntegrationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


def is_retryable(exc: Exception) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS
    return False


async def call_with_retries(
    operation: Callable[[], Awaitable[T]],
    *,
    name: str,
    error_cls: type[IntegrationError],
    max_retries: int,
    backoff: float,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``operation`` up to ``max_retries + 1`` times.

    Timeouts, transport errors and 429/5xx responses are retried after
    ``backoff * 2 ** attempt`` seconds. Anything else, or the last failure,
    is re-raised as ``error_cls``.
    """

    attempts = max(max_retries, 0) + 1
    for attempt in range(attempts):
        try:
            return await operation()
        except httpx.HTTPError as exc:
            status_code = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
            if attempt < attempts - 1 and is_retryable(exc):
                delay = backoff * 2**attempt
                logger.warning(
                    "%s attempt %d/%d failed (%s); retrying in %.2fs",
                    name,
                    attempt + 1,
                    attempts,
                    exc.__class__.__name__,
                    delay,
                )
                await sleep(delay)
                continue

            logger.error("%s request failed after %d attempt(s): %s", name, attempt + 1, exc.__class__.__name__)
            if isinstance(exc, httpx.TimeoutException):
                raise error_cls(f"{name} request timed out.") from exc
            if status_code is not None:
                raise error_cls(f"{name} returned HTTP {status_code}.", status_code=status_code) from exc
            raise error_cls(f"{name} is unreachable: {exc.__class__.__name__}.") from exc

    raise error_cls(f"{name} request was not attempted.")  # pragma: no cover - loop always returns or raises
