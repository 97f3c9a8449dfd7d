"""
Blob store - opaque byte storage keyed by owner

The engine never persists anything itself. Encoded documents are handed to
a BlobStore, which keeps them unchanged and returns them to the same owner
later. Lookups are owner-scoped: asking for another owner's blob looks
exactly like asking for a blob that does not exist.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Tuple

from geco.models.enums import LogCategory
from geco.models.errors import BlobNotFound, BlobTooLarge
from geco.utils.logger import get_logger

log = get_logger().for_category(LogCategory.STORAGE)

DEFAULT_MAX_BLOB_BYTES = 16 * 1024 * 1024


@dataclass(frozen=True)
class BlobInfo:
    """Listing entry for a stored blob (data excluded)"""
    blob_id: str
    owner_id: str
    name: str
    size: int
    created_at: datetime


@dataclass(frozen=True)
class _StoredBlob:
    info: BlobInfo
    data: bytes = field(repr=False)


class BlobStore(ABC):
    """Interface for owner-scoped opaque byte storage"""

    @abstractmethod
    def put(self, owner_id: str, data: bytes, name: str = "") -> str:
        """Store bytes, return a new blob id"""

    @abstractmethod
    def get(self, owner_id: str, blob_id: str) -> bytes:
        """Return stored bytes unchanged. Raises BlobNotFound."""

    @abstractmethod
    def list(self, owner_id: str) -> List[BlobInfo]:
        """All blobs of one owner, oldest first"""


class InMemoryBlobStore(BlobStore):
    """Process-local BlobStore, used by the API server and tests"""

    def __init__(self, max_blob_bytes: int = DEFAULT_MAX_BLOB_BYTES):
        self.max_blob_bytes = max_blob_bytes
        self._blobs: Dict[Tuple[str, str], _StoredBlob] = {}

    def put(self, owner_id: str, data: bytes, name: str = "") -> str:
        if len(data) > self.max_blob_bytes:
            raise BlobTooLarge(len(data), self.max_blob_bytes)

        blob_id = uuid.uuid4().hex
        info = BlobInfo(
            blob_id=blob_id,
            owner_id=owner_id,
            name=name,
            size=len(data),
            created_at=datetime.now(timezone.utc),
        )
        self._blobs[(owner_id, blob_id)] = _StoredBlob(info=info, data=bytes(data))

        log.info("Blob stored", owner=owner_id, blob=blob_id, size=len(data))
        return blob_id

    def get(self, owner_id: str, blob_id: str) -> bytes:
        stored = self._blobs.get((owner_id, blob_id))
        if stored is None:
            log.warn("Blob not found or not owned", owner=owner_id, blob=blob_id)
            raise BlobNotFound(blob_id)
        return stored.data

    def list(self, owner_id: str) -> List[BlobInfo]:
        return [
            stored.info
            for (owner, _), stored in self._blobs.items()
            if owner == owner_id
        ]
