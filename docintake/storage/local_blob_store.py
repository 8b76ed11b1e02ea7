from pathlib import Path

from docintake.logging.logger import Log
from docintake.storage.base import BaseBlobStore
from docintake.storage.exceptions import BlobStorageError, InvalidBlobKeyError


class LocalBlobStore(BaseBlobStore):
    """Stores blobs as files below a root directory, one file per key."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def put(self, key: str, content: bytes) -> None:
        path = self._resolve_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise BlobStorageError(f"Failed to write blob '{key}': {exc}") from exc
        Log.debug(f"Stored {len(content)} bytes at {path}")

    def delete(self, key: str) -> None:
        path = self._resolve_path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise BlobStorageError(f"Failed to delete blob '{key}': {exc}") from exc

    def exists(self, key: str) -> bool:
        return self._resolve_path(key).is_file()

    def _resolve_path(self, key: str) -> Path:
        root = self._files_root.resolve()
        path = (root / key).resolve()
        if not path.is_relative_to(root):
            raise InvalidBlobKeyError(f"Blob key '{key}' escapes the storage root")
        return path
