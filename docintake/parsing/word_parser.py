import io
import zipfile
import xml.etree.ElementTree as ET

from docintake.parsing.base import BaseParser, word_count
from docintake.parsing.exceptions import ParseFailure
from docintake.parsing.models import ParsedResult, extracted_at

_W_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"


class WordParser(BaseParser):
    """Raw text of a .docx body, one line per paragraph."""

    name = "word"
    mime_types = (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    )

    def parse(self, content: bytes) -> ParsedResult:
        try:
            with zipfile.ZipFile(io.BytesIO(content)) as archive:
                xml_payload = archive.read("word/document.xml")
            root = ET.fromstring(xml_payload)
        except (zipfile.BadZipFile, KeyError, ET.ParseError) as exc:
            raise ParseFailure(f"Word parsing failed: {exc}") from exc

        text = "\n".join(self._paragraphs(root))
        return ParsedResult(
            raw=text,
            metadata={
                "extractedAt": extracted_at(),
                "wordCount": word_count(text),
            },
        )

    @staticmethod
    def _paragraphs(root: ET.Element) -> list[str]:
        paragraphs = []
        for paragraph in root.iter(f"{_W_NS}p"):
            parts = []
            for node in paragraph.iter():
                if node.tag == f"{_W_NS}t" and node.text:
                    parts.append(node.text)
                elif node.tag == f"{_W_NS}tab":
                    parts.append("\t")
                elif node.tag in (f"{_W_NS}br", f"{_W_NS}cr"):
                    parts.append("\n")
            paragraphs.append("".join(parts))
        return paragraphs
