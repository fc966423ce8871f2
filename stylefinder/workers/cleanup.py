"""Cleanup tasks for stale upload scratch files."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


def remove_expired_uploads(root: Path, ttl: timedelta, now: datetime | None = None) -> int:
    """
    Delete ``upload_*`` files under ``root`` older than ``ttl``.

    Returns the number of deleted files. Normal requests remove their own
    files; this catches leftovers from processes that died mid-request.
    """

    if not root.exists():
        return 0

    cutoff = (now or datetime.now(timezone.utc)) - ttl
    removed = 0
    for path in root.glob("upload_*"):
        if not path.is_file():
            continue
        modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
        if modified < cutoff:
            path.unlink(missing_ok=True)
            removed += 1

    if removed:
        logger.info("Removed %d expired upload(s) from %s", removed, root)
    return removed
