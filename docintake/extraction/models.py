from dataclasses import dataclass, field
from typing import Any

JSON_PARSE_ERROR = "Failed to parse as JSON"


@dataclass(frozen=True)
class ExtractionResult:
    """Output of one collaborator round-trip.

    ``degraded`` is set when the response was not a JSON object and the
    payload is the raw-text fallback instead.
    """

    payload: dict[str, Any] = field(default_factory=dict)
    degraded: bool = False
