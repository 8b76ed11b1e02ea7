from collections.abc import Sequence

from docintake.logging.logger import Log
from docintake.parsing.base import BaseParser, word_count
from docintake.parsing.models import ParsedResult, extracted_at
from docintake.pdf.base import BasePdfExtractor
from docintake.pdf.exceptions import PdfExtractionError
from docintake.pdf.stream_scan_adapter import StreamScanAdapter


class PdfParser(BaseParser):
    """PDF text via a chain of engines; never fails.

    Engines are tried in order until one returns text. When all of them come
    back empty the fixed placeholder is used as the document content.
    """

    name = "pdf"
    mime_types = ("application/pdf",)

    PLACEHOLDER = "PDF parsing not fully supported"

    def __init__(self, extractors: Sequence[BasePdfExtractor] | None = None) -> None:
        self._extractors = list(extractors) if extractors else [StreamScanAdapter()]

    def parse(self, content: bytes) -> ParsedResult:
        text, engine = self._extract(content)
        if not text:
            text, engine = self.PLACEHOLDER, None
        return ParsedResult(
            raw=text,
            metadata={
                "extractedAt": extracted_at(),
                "wordCount": word_count(text),
                "engine": engine,
            },
        )

    def _extract(self, content: bytes) -> tuple[str, str | None]:
        for extractor in self._extractors:
            try:
                text = extractor.extract(content)
            except PdfExtractionError as exc:
                Log.warning(f"PDF engine {extractor.name} failed, trying next: {exc}")
                continue
            if text:
                return text, extractor.name
        return "", None
