class PollerError(Exception):
    """Base exception for client-side errors."""


class PollTimeoutError(PollerError):
    """Raised when polling gives up before a terminal status is seen."""


class ClientError(PollerError):
    """Raised when the documents API call fails."""
