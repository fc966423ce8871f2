"""Async client for the Google Custom Search JSON API."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from stylefinder.config.settings import Settings
from stylefinder.integrations.errors import SearchUnavailable
from stylefinder.integrations.retry import call_with_retries

logger = logging.getLogger(__name__)

MAX_RESULTS_PER_PAGE = 10


class SearchClient:
    """Queries a Programmable Search Engine for shoppable results."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._client = http_client or httpx.AsyncClient(
            timeout=settings.request_timeout,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def search(self, query: str, count: int) -> list[Mapping[str, Any]]:
        """Return raw result items, best match first; an empty list when nothing matched."""

        if not self._settings.search_configured:
            raise SearchUnavailable("Google Custom Search API configuration is missing.")

        params = {
            "key": self._settings.search_api_key,
            "cx": self._settings.search_engine_id,
            "q": query,
            "num": max(1, min(count, MAX_RESULTS_PER_PAGE)),
            "hl": self._settings.search_locale,
        }

        async def _get() -> dict[str, Any]:
            response = await self._client.get(self._settings.search_base_url, params=params)
            response.raise_for_status()
            return response.json()

        try:
            data = await call_with_retries(
                _get,
                name="Google Custom Search",
                error_cls=SearchUnavailable,
                max_retries=self._settings.max_retries,
                backoff=self._settings.retry_backoff,
            )
        except ValueError as exc:
            raise SearchUnavailable("Google Custom Search returned a non-JSON body.") from exc

        items = data.get("items") or []
        logger.debug("Search for %r returned %d items", query, len(items))
        return [item for item in items if isinstance(item, Mapping)]

    async def ping(self) -> bool:
        """Return ``True`` when a one-result query succeeds."""

        await self.search("vêtement", 1)
        return True
