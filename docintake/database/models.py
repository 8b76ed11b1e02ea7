from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class DocumentStatus(StrEnum):
    """Lifecycle states of a Document.

    PROCESSING is only persisted when ``persist_processing_state`` is on;
    otherwise clients infer it from a PENDING row that has not settled yet.
    """

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({DocumentStatus.COMPLETED, DocumentStatus.FAILED})

ALLOWED_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.PENDING: frozenset(
        {DocumentStatus.PROCESSING, DocumentStatus.COMPLETED, DocumentStatus.FAILED}
    ),
    DocumentStatus.PROCESSING: frozenset(
        {DocumentStatus.COMPLETED, DocumentStatus.FAILED}
    ),
    DocumentStatus.COMPLETED: frozenset(),
    DocumentStatus.FAILED: frozenset(),
}


def allowed_predecessors(target: DocumentStatus) -> list[DocumentStatus]:
    """Statuses a document may be in for a transition into ``target``."""
    return [
        source
        for source, targets in ALLOWED_TRANSITIONS.items()
        if target in targets
    ]


class DocumentCategory(StrEnum):
    """Uploader-declared document category, independent of file format."""

    FIELD_REPORT = "FIELD_REPORT"
    SURVEY_FORM = "SURVEY_FORM"
    SOP_MANUAL = "SOP_MANUAL"
    DONOR_REPORT = "DONOR_REPORT"
    TRAINING_MATERIAL = "TRAINING_MATERIAL"
    HAZARD_SURVEY = "HAZARD_SURVEY"
    INCIDENT_LOG = "INCIDENT_LOG"


@dataclass(frozen=True)
class NewDocument:
    """Fields supplied by the upload processor when a document is created."""

    id: str
    owner_id: str
    title: str
    content: str
    category: DocumentCategory
    source_format: str
    size_bytes: int
    file_ref: str | None = None
    structured: dict[str, Any] | None = None


@dataclass
class Document:
    """Represents a row from the documents table."""

    id: str
    owner_id: str
    title: str
    content: str
    category: DocumentCategory
    source_format: str
    size_bytes: int
    status: DocumentStatus
    file_ref: str | None = None
    structured: dict[str, Any] | None = None
    extracted_data: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def byte_format(self) -> str:
        return self.source_format

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation used by the HTTP layer."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "type": self.category.value,
            "fileType": self.source_format,
            "fileSize": self.size_bytes,
            "fileRef": self.file_ref,
            "status": self.status.value,
            "structured": self.structured,
            "extractedData": self.extracted_data,
            "ownerId": self.owner_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class DocumentFilters:
    category: DocumentCategory | None = None
    status: DocumentStatus | None = None
    limit: int = 50
    offset: int = 0
