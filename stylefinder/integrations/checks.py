"""Connectivity checks for the external vision and search services."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

from stylefinder.config.settings import Settings, get_settings
from stylefinder.integrations.search_client import SearchClient
from stylefinder.integrations.vision_client import VisionClient


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except Exception as exc:
        return IntegrationCheckResult(name=name, success=False, message=str(exc))

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_vision(settings: Settings | None = None) -> IntegrationCheckResult:
    """Send a probe image to Google Vision and return the result."""

    client = VisionClient(settings or get_settings())

    async def _ping() -> bool:
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="Google Vision",
        factory=_ping,
        success_message="Google Vision API is reachable.",
    )


async def check_search(settings: Settings | None = None) -> IntegrationCheckResult:
    """Run a one-result query against Google Custom Search and return the result."""

    client = SearchClient(settings or get_settings())

    async def _ping() -> bool:
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="Google Custom Search",
        factory=_ping,
        success_message="Google Custom Search API is reachable.",
    )


async def run_all_checks(settings: Settings | None = None) -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    return list(await asyncio.gather(check_vision(settings), check_search(settings)))
