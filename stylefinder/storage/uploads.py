"""Scratch storage for uploaded images."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator, Protocol

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class UploadTooLarge(ValueError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Upload exceeds the {limit} byte limit.")


class AsyncReadable(Protocol):
    async def read(self, size: int = -1) -> bytes: ...


class UploadStore:
    """Writes uploads to uniquely named temporary files and always removes them."""

    def __init__(self, root: Path, max_bytes: int) -> None:
        self._root = root
        self._max_bytes = max_bytes

    @property
    def root(self) -> Path:
        return self._root

    def _new_path(self, suffix: str) -> Path:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        safe_suffix = suffix if suffix.startswith(".") and suffix[1:].isalnum() else ""
        return self._root / f"upload_{stamp}_{uuid.uuid4().hex}{safe_suffix.lower()}"

    @contextlib.asynccontextmanager
    async def scoped_upload(self, source: AsyncReadable, suffix: str = "") -> AsyncIterator[Path]:
        """
        Stream ``source`` to a fresh scratch file and yield its path.

        The file is deleted on exit, including when the body raises or the
        task is cancelled. Raises ``UploadTooLarge`` past ``max_bytes``.
        """

        self._root.mkdir(parents=True, exist_ok=True)
        path = self._new_path(suffix)
        try:
            written = 0
            with path.open("wb") as handle:
                while True:
                    chunk = await source.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self._max_bytes:
                        raise UploadTooLarge(self._max_bytes)
                    await asyncio.to_thread(handle.write, chunk)
            logger.debug("Stored upload %s (%d bytes)", path.name, written)
            yield path
        finally:
            path.unlink(missing_ok=True)
