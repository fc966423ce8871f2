"""Temporary upload storage."""

from .uploads import UploadStore, UploadTooLarge

__all__ = ["UploadStore", "UploadTooLarge"]
