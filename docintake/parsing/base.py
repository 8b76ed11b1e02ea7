from abc import ABC, abstractmethod
from typing import ClassVar

from docintake.parsing.models import ParsedResult


class BaseParser(ABC):
    """Contract for all format parsers."""

    name: ClassVar[str]
    mime_types: ClassVar[tuple[str, ...]]

    @abstractmethod
    def parse(self, content: bytes) -> ParsedResult:
        """Convert raw upload bytes into a ParsedResult.

        Raises:
            ParseFailure: if the parser's format policy allows failure.
        """


def word_count(text: str) -> int:
    return len(text.split())
