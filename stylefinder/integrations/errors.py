"""Errors raised at the external service boundaries."""

from __future__ import annotations


class IntegrationError(RuntimeError):
    """Raised when an external service cannot serve a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class VisionUnavailable(IntegrationError):
    """Vision service failed: missing key, quota, network or API error."""


class SearchUnavailable(IntegrationError):
    """Search service failed: missing key, quota, network or API error."""
