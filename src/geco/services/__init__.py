"""Services layer"""

from .document_service import DocumentService
from .blob_store import BlobStore, BlobInfo, InMemoryBlobStore
from .storage_service import AnimationStorageService

__all__ = [
    "DocumentService",
    "BlobStore",
    "BlobInfo",
    "InMemoryBlobStore",
    "AnimationStorageService",
]
