class StorageError(Exception):
    """Base exception for all blob storage errors."""


class BlobStorageError(StorageError):
    """Raised when a blob cannot be written or removed."""


class InvalidBlobKeyError(StorageError):
    """Raised when a key would resolve outside the storage root."""
