from docintake.config.settings import Settings
from docintake.storage.base import BaseBlobStore
from docintake.storage.local_blob_store import LocalBlobStore
from docintake.storage.memory_blob_store import InMemoryBlobStore


class BlobStoreFactory:
    """Creates the configured blob store."""

    @classmethod
    def create(cls, settings: Settings) -> BaseBlobStore:
        backend = settings.blob_store.lower()
        if backend == "local":
            return LocalBlobStore(files_root=settings.files_root)
        if backend == "memory":
            return InMemoryBlobStore()
        raise ValueError(
            f"Unknown blob store '{backend}'. Choose from: ['local', 'memory']"
        )
