from abc import ABC, abstractmethod
from pathlib import PurePosixPath


def blob_key(owner_id: str, document_id: str, filename: str) -> str:
    """Build the storage key: documents/{owner_id}/{document_id}/{filename}.

    Only the final path component of ``filename`` is kept, so a crafted
    upload name cannot reach into another owner's prefix.
    """
    name = PurePosixPath(filename.replace("\\", "/")).name or "upload"
    return f"documents/{owner_id}/{document_id}/{name}"


class BaseBlobStore(ABC):
    """Contract for uploaded-file storage backends."""

    @abstractmethod
    def put(self, key: str, content: bytes) -> None:
        """Store bytes under key, replacing any previous value.

        Raises:
            BlobStorageError: if the write fails.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the blob under key. Missing keys are not an error.

        Raises:
            BlobStorageError: if the removal fails.
        """
