from collections.abc import Iterable

from docintake.config.settings import Settings
from docintake.logging.logger import Log
from docintake.parsing.base import BaseParser
from docintake.parsing.csv_parser import CsvParser
from docintake.parsing.exceptions import UnsupportedFormatError
from docintake.parsing.models import (
    ParsedResult,
    ParseFallback,
    ParseOutcome,
    ParseSuccess,
    extracted_at,
)
from docintake.parsing.pdf_parser import PdfParser
from docintake.parsing.spreadsheet_parser import SpreadsheetParser
from docintake.parsing.text_parser import TextParser
from docintake.parsing.word_parser import WordParser
from docintake.pdf.factory import PdfExtractorFactory


class ParseDispatcher:
    """Routes bytes to a parser by exact MIME type and never raises.

    Any parser error, including an unregistered MIME type, is turned into a
    fallback result whose ``raw`` text is the diagnostic message. That text
    continues down the pipeline like regular content.
    """

    def __init__(self, parsers: Iterable[BaseParser]) -> None:
        self._parsers: dict[str, BaseParser] = {}
        for parser in parsers:
            for mime_type in parser.mime_types:
                self._parsers[mime_type] = parser

    @property
    def supported_mime_types(self) -> list[str]:
        return sorted(self._parsers)

    def parse(self, content: bytes, mime_type: str) -> ParsedResult:
        return self.dispatch(content, mime_type).result

    def dispatch(self, content: bytes, mime_type: str) -> ParseOutcome:
        try:
            parser = self._select(mime_type)
            result = parser.parse(content)
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            Log.warning(f"Parse error for {mime_type!r}: {message}")
            return ParseFallback(result=_fallback_result(message), error=message)

        Log.info(f"Parsed {len(content)} bytes as {parser.name}: {len(result.raw)} chars")
        return ParseSuccess(result=result, parser=parser.name)

    def _select(self, mime_type: str) -> BaseParser:
        parser = self._parsers.get(mime_type)
        if parser is None:
            raise UnsupportedFormatError(f"Unsupported file type: {mime_type}")
        return parser


def _fallback_result(message: str) -> ParsedResult:
    return ParsedResult(
        raw=f"Error parsing file: {message}",
        metadata={"extractedAt": extracted_at(), "error": message},
    )


def build_dispatcher(settings: Settings) -> ParseDispatcher:
    """Build a ParseDispatcher with every format parser registered."""
    return ParseDispatcher(
        [
            PdfParser(PdfExtractorFactory.create_chain(settings)),
            WordParser(),
            SpreadsheetParser(),
            CsvParser(),
            TextParser(),
        ]
    )
