class PdfExtractionError(Exception):
    """Raised when a PDF engine cannot extract text."""
