class ParsingError(Exception):
    """Base exception for all parsing-related errors."""


class ParseFailure(ParsingError):
    """Raised by a format parser when the content cannot be read."""


class UnsupportedFormatError(ParseFailure):
    """Raised when no parser is registered for the declared MIME type."""
