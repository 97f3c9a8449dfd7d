"""Storage service - save/load encoded animations through a BlobStore"""

from typing import TYPE_CHECKING, List

from geco.engine.codec import decode_document
from geco.models.enums import LogCategory
from geco.services.blob_store import BlobInfo, BlobStore
from geco.utils.logger import get_logger

if TYPE_CHECKING:
    from geco.engine.animation_engine import AnimationEngine

log = get_logger().for_category(LogCategory.STORAGE)


class AnimationStorageService:
    """
    Business logic between engines and the blob store.

    Raw bytes coming from outside are decoded once before they are stored,
    so the store only ever holds documents that will load again.
    """

    def __init__(self, store: BlobStore):
        self.store = store

    def save(self, owner_id: str, engine: 'AnimationEngine') -> str:
        """Encode the engine's document and store it for `owner_id`"""
        data = engine.encode()
        blob_id = self.store.put(owner_id, data, name=engine.get_animation_name())
        log.info("Animation saved", owner=owner_id, blob=blob_id, name=engine.get_animation_name())
        return blob_id

    def save_bytes(self, owner_id: str, data: bytes) -> str:
        """
        Validate and store already-encoded bytes

        Raises:
            DecodeError: data is not a valid encoded document
            BlobTooLarge: data exceeds the store limit
        """
        document = decode_document(data)
        blob_id = self.store.put(owner_id, data, name=document.name)
        log.info("Animation bytes saved", owner=owner_id, blob=blob_id, name=document.name)
        return blob_id

    def load(self, owner_id: str, blob_id: str, engine: 'AnimationEngine') -> None:
        """
        Decode a stored blob into `engine`, replacing its document

        Raises:
            BlobNotFound: no such blob for this owner
            DecodeError: stored bytes no longer decode (engine untouched)
        """
        data = self.store.get(owner_id, blob_id)
        engine.decode(data)
        log.info("Animation loaded", owner=owner_id, blob=blob_id, name=engine.get_animation_name())

    def get_bytes(self, owner_id: str, blob_id: str) -> bytes:
        return self.store.get(owner_id, blob_id)

    def list(self, owner_id: str) -> List[BlobInfo]:
        return self.store.list(owner_id)
