import threading

from docintake.storage.base import BaseBlobStore


class InMemoryBlobStore(BaseBlobStore):
    """Dict-backed blob store for tests and single-process runs."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def put(self, key: str, content: bytes) -> None:
        with self._lock:
            self._blobs[key] = bytes(content)

    def delete(self, key: str) -> None:
        with self._lock:
            self._blobs.pop(key, None)

    def get(self, key: str) -> bytes | None:
        with self._lock:
            return self._blobs.get(key)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._blobs)
