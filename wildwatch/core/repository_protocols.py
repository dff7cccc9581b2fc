"""Boundary Protocols — contracts between route handlers and external storage.

Invariants:
    - Routes depend on ObjectStore, never on a concrete storage backend
    - get() returns None for an absent key (never raises for "not found")
    - get() returns metadata only; the body is read through iter_bytes()
"""

from dataclasses import dataclass
from datetime import datetime
from typing import AsyncIterator, Protocol


@dataclass(frozen=True)
class StoredObject:
    """HTTP metadata for a binary object; the body is streamed separately."""
    key: str
    content_type: str
    etag: str
    size: int
    last_modified: datetime | None = None


class ObjectStore(Protocol):
    """Contract for uploaded-media retrieval — implemented by infrastructure."""
    async def get(self, key: str) -> StoredObject | None: ...

    def iter_bytes(self, stored: StoredObject) -> AsyncIterator[bytes]: ...
