"""Local Object Store — serves uploaded media from a directory tree.

Invariants:
    - Keys resolve strictly inside the configured root (no path traversal)
    - Missing or escaping keys return None
    - ETag is the quoted MD5 of the object body
    - Bodies are read in chunk_size pieces, never held in memory whole
"""

import asyncio
import hashlib
import logging
import mimetypes
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator

from wildwatch.core.repository_protocols import StoredObject

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
CHUNK_SIZE = 64 * 1024


class LocalObjectStore:
    """Filesystem-backed ObjectStore."""

    def __init__(self, root: str | Path, chunk_size: int = CHUNK_SIZE):
        self.root = Path(root).resolve()
        self.chunk_size = chunk_size

    def _resolve(self, key: str) -> Path | None:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root) or path == self.root:
            logger.warning(
                f"Rejected object key outside store root: {key}",
                extra={"object_key": key},
            )
            return None
        return path

    def _md5(self, path: Path) -> str:
        digest = hashlib.md5()
        with path.open("rb") as f:
            while True:
                chunk = f.read(self.chunk_size)
                if not chunk:
                    break
                digest.update(chunk)
        return digest.hexdigest()

    def _stat(self, key: str) -> StoredObject | None:
        path = self._resolve(key)
        if path is None or not path.is_file():
            return None
        content_type, _ = mimetypes.guess_type(path.name)
        info = path.stat()
        return StoredObject(
            key=key,
            content_type=content_type or DEFAULT_CONTENT_TYPE,
            etag=f'"{self._md5(path)}"',
            size=info.st_size,
            last_modified=datetime.fromtimestamp(info.st_mtime, tz=timezone.utc),
        )

    async def get(self, key: str) -> StoredObject | None:
        return await asyncio.to_thread(self._stat, key)

    async def iter_bytes(self, stored: StoredObject) -> AsyncIterator[bytes]:
        path = self._resolve(stored.key)
        if path is None:
            return
        f = await asyncio.to_thread(path.open, "rb")
        try:
            while True:
                chunk = await asyncio.to_thread(f.read, self.chunk_size)
                if not chunk:
                    break
                yield chunk
        finally:
            f.close()
