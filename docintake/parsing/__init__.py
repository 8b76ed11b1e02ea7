from docintake.parsing.dispatcher import ParseDispatcher, build_dispatcher
from docintake.parsing.models import ParsedResult, ParseFallback, ParseOutcome, ParseSuccess

__all__ = [
    "ParseDispatcher",
    "ParseFallback",
    "ParseOutcome",
    "ParseSuccess",
    "ParsedResult",
    "build_dispatcher",
]
