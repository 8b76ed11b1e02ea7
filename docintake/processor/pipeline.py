from abc import ABC, abstractmethod
from dataclasses import dataclass

from docintake.database.models import DocumentCategory, DocumentStatus
from docintake.parsing.models import ParseOutcome
from docintake.processor.models import UploadRequest


@dataclass(slots=True)
class PipelineContext:
    request: UploadRequest
    document_id: str
    category: DocumentCategory | None = None
    file_ref: str | None = None
    parse_outcome: ParseOutcome | None = None
    document_created: bool = False
    status: DocumentStatus = DocumentStatus.PENDING


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
