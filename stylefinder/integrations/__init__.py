"""Clients and health checks for the external vision and search services."""

from .checks import IntegrationCheckResult, check_search, check_vision, run_all_checks
from .errors import IntegrationError, SearchUnavailable, VisionUnavailable
from .search_client import SearchClient
from .vision_client import VisionClient

__all__ = [
    "IntegrationCheckResult",
    "IntegrationError",
    "SearchClient",
    "SearchUnavailable",
    "VisionClient",
    "VisionUnavailable",
    "check_search",
    "check_vision",
    "run_all_checks",
]
