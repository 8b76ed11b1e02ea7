import copy
import threading
from datetime import UTC, datetime
from typing import Any

from docintake.database.exceptions import (
    DocumentNotFoundError,
    InvalidStatusTransitionError,
)
from docintake.database.models import (
    ALLOWED_TRANSITIONS,
    Document,
    DocumentFilters,
    DocumentStatus,
    NewDocument,
)
from docintake.database.repositories.base import BaseDocumentRepository


class InMemoryDocumentsRepository(BaseDocumentRepository):
    """Process-local document store for tests and single-process runs.

    Rows are copied in and out so callers never share mutable state with
    the store.
    """

    def __init__(self) -> None:
        self._rows: dict[str, Document] = {}
        self._lock = threading.Lock()

    def create_document(self, document: NewDocument) -> Document:
        now = datetime.now(UTC)
        row = Document(
            id=document.id,
            owner_id=document.owner_id,
            title=document.title,
            content=document.content,
            category=document.category,
            source_format=document.source_format,
            size_bytes=document.size_bytes,
            file_ref=document.file_ref,
            structured=copy.deepcopy(document.structured),
            status=DocumentStatus.PENDING,
            extracted_data={},
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            if document.id in self._rows:
                raise ValueError(f"Document {document.id} already exists")
            self._rows[document.id] = row
        return copy.deepcopy(row)

    def update_document_status(
        self,
        document_id: str,
        owner_id: str,
        status: DocumentStatus,
        extracted_data: dict[str, Any] | None = None,
    ) -> None:
        with self._lock:
            row = self._owned_row(document_id, owner_id)
            if status not in ALLOWED_TRANSITIONS[row.status]:
                raise InvalidStatusTransitionError(
                    f"Document {document_id} cannot move from "
                    f"{row.status.value} to {status.value}"
                )
            row.status = status
            row.extracted_data = copy.deepcopy(extracted_data or {})
            row.updated_at = datetime.now(UTC)

    def get_document_by_id(self, document_id: str, owner_id: str) -> Document:
        with self._lock:
            return copy.deepcopy(self._owned_row(document_id, owner_id))

    def list_documents(
        self, owner_id: str, filters: DocumentFilters | None = None
    ) -> list[Document]:
        filters = filters or DocumentFilters()
        with self._lock:
            # Insertion order breaks ties between equal creation timestamps.
            rows = [
                (position, row)
                for position, row in enumerate(self._rows.values())
                if row.owner_id == owner_id
                and (filters.category is None or row.category == filters.category)
                and (filters.status is None or row.status == filters.status)
            ]
            rows.sort(key=lambda item: (item[1].created_at, item[0]), reverse=True)
            page = [row for _, row in rows[filters.offset : filters.offset + filters.limit]]
            return copy.deepcopy(page)

    def delete_document(self, document_id: str, owner_id: str) -> None:
        with self._lock:
            self._owned_row(document_id, owner_id)
            del self._rows[document_id]

    def _owned_row(self, document_id: str, owner_id: str) -> Document:
        row = self._rows.get(document_id)
        if row is None or row.owner_id != owner_id:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return row
