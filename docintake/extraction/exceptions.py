class ExtractionError(Exception):
    """Raised when the AI collaborator call fails."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
