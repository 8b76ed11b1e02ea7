class DocumentStoreError(Exception):
    """Base exception for all lifecycle store errors."""


class DocumentNotFoundError(DocumentStoreError):
    """Raised when a document is missing or not owned by the requester."""


class InvalidStatusTransitionError(DocumentStoreError):
    """Raised when a status update would move a document backwards."""
