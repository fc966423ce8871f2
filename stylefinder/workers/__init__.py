"""Background maintenance tasks."""

from .cleanup import remove_expired_uploads

__all__ = ["remove_expired_uploads"]
