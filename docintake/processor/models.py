from dataclasses import dataclass

from docintake.database.models import DocumentStatus


@dataclass(frozen=True)
class UploadRequest:
    """One upload as received from the caller."""

    owner_id: str
    filename: str
    content: bytes
    mime_type: str
    category: str


@dataclass(frozen=True)
class UploadOutcome:
    """Result reported to the uploader.

    The upload succeeded whenever an outcome exists; ``status`` tells whether
    extraction completed or failed.
    """

    document_id: str
    status: DocumentStatus

    @property
    def message(self) -> str:
        if self.status is DocumentStatus.FAILED:
            return "Document uploaded successfully, but AI extraction failed."
        if self.status is DocumentStatus.COMPLETED:
            return "Document uploaded and processed successfully."
        return "Document uploaded successfully. AI extraction in progress."
