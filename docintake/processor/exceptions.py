class ProcessorError(Exception):
    """Base exception for all upload processing errors."""


class OversizedUploadError(ProcessorError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, size_bytes: int, max_bytes: int) -> None:
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
        super().__init__(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB"
        )


class InvalidDocumentCategoryError(ProcessorError):
    """Raised when the declared document category is not recognized."""
