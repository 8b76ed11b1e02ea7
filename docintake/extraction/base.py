from abc import ABC, abstractmethod

from docintake.database.models import DocumentCategory
from docintake.extraction.models import ExtractionResult


class BaseExtractor(ABC):
    """Contract for all extraction adapters."""

    @abstractmethod
    def extract(self, text: str, category: DocumentCategory) -> ExtractionResult:
        """Turn normalized document text into a structured payload.

        Args:
            text: Normalized text from the parse step, untruncated.
            category: Uploader-declared document category.

        Returns:
            ExtractionResult, degraded when the response is not a JSON object.

        Raises:
            ExtractionError: when the collaborator call itself fails.
        """
