"""Logging configuration module."""

from __future__ import annotations

import logging

from stylefinder.config.settings import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logger according to project conventions."""

    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    # httpx request lines include the query string, which carries the API keys.
    logging.getLogger("httpx").setLevel(logging.WARNING)
