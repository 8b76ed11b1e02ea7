from docintake.parsing.base import BaseParser, word_count
from docintake.parsing.models import ParsedResult, extracted_at


class TextParser(BaseParser):
    """Plain text. Invalid UTF-8 sequences are replaced, so this never fails."""

    name = "text"
    mime_types = ("text/plain",)

    def parse(self, content: bytes) -> ParsedResult:
        text = content.decode("utf-8", errors="replace")
        return ParsedResult(
            raw=text,
            metadata={
                "extractedAt": extracted_at(),
                "wordCount": word_count(text),
                "lineCount": text.count("\n") + 1,
            },
        )
