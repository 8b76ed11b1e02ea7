from datetime import datetime

from docintake.parsing.text_parser import TextParser


class TestTextParser:
    def test_returns_decoded_text(self) -> None:
        result = TextParser().parse(b"Team Alpha cleared sector 7")
        assert result.raw == "Team Alpha cleared sector 7"
        assert result.structured is None

    def test_counts_words_and_lines(self) -> None:
        result = TextParser().parse(b"line one\nline two\n\nlast")
        assert result.metadata["wordCount"] == 5
        assert result.metadata["lineCount"] == 4

    def test_empty_content_has_one_line_and_no_words(self) -> None:
        result = TextParser().parse(b"")
        assert result.raw == ""
        assert result.metadata["wordCount"] == 0
        assert result.metadata["lineCount"] == 1

    def test_replaces_invalid_utf8(self) -> None:
        result = TextParser().parse(b"bad \xff byte")
        assert result.raw == "bad \ufffd byte"

    def test_extracted_at_is_iso_timestamp(self) -> None:
        result = TextParser().parse(b"x")
        parsed = datetime.fromisoformat(result.metadata["extractedAt"])
        assert parsed.tzinfo is not None
