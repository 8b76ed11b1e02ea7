from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def extracted_at() -> str:
    """ISO-8601 UTC timestamp stamped into every result's metadata."""
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True)
class ParsedResult:
    """Normalized output of a format parser.

    ``metadata`` and ``structured`` are JSON payloads handed to clients, so
    their keys follow the wire naming (``extractedAt``, ``rowCount``, ...).
    """

    raw: str
    metadata: dict[str, Any] = field(default_factory=dict)
    structured: dict[str, Any] | None = None


@dataclass(frozen=True)
class ParseSuccess:
    """The selected parser produced a result."""

    result: ParsedResult
    parser: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ParseFallback:
    """Parsing failed; ``result`` carries the diagnostic text instead."""

    result: ParsedResult
    error: str

    @property
    def ok(self) -> bool:
        return False


ParseOutcome = ParseSuccess | ParseFallback
