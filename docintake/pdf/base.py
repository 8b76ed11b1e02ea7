from abc import ABC, abstractmethod
from collections.abc import Iterable

from docintake.pdf.exceptions import PdfExtractionError


class BasePdfExtractor(ABC):
    """A PDF text engine, tried in order by ``PdfParser``.

    Library-backed engines only implement ``_page_texts``. Joining pages and
    turning library errors into ``PdfExtractionError`` happen here.
    """

    name: str = "base"

    def extract(self, pdf_bytes: bytes) -> str:
        """Return the document text with pages separated by newlines, possibly empty.

        Raises:
            PdfExtractionError: if the engine cannot read the bytes.
        """
        try:
            return "\n".join(self._page_texts(pdf_bytes)).strip()
        except Exception as exc:
            raise PdfExtractionError(f"{self.name} extraction failed: {exc}") from exc

    @abstractmethod
    def _page_texts(self, pdf_bytes: bytes) -> Iterable[str]:
        """Text of each page in reading order."""
