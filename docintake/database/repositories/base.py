from abc import ABC, abstractmethod
from typing import Any

from docintake.database.models import (
    Document,
    DocumentFilters,
    DocumentStatus,
    NewDocument,
)


class BaseDocumentRepository(ABC):
    """Contract for document lifecycle stores.

    Every operation is scoped by owner. A document owned by someone else is
    reported exactly like a missing one.
    """

    @abstractmethod
    def create_document(self, document: NewDocument) -> Document:
        """Persist a new document with status PENDING and empty extracted data."""

    @abstractmethod
    def update_document_status(
        self,
        document_id: str,
        owner_id: str,
        status: DocumentStatus,
        extracted_data: dict[str, Any] | None = None,
    ) -> None:
        """Move a document forward in its lifecycle.

        Raises:
            DocumentNotFoundError: if the document is missing or not owned.
            InvalidStatusTransitionError: if the move is not forward.
        """

    @abstractmethod
    def get_document_by_id(self, document_id: str, owner_id: str) -> Document:
        """Raises DocumentNotFoundError if missing or not owned."""

    @abstractmethod
    def list_documents(
        self, owner_id: str, filters: DocumentFilters | None = None
    ) -> list[Document]:
        """Return the owner's documents, newest first."""

    @abstractmethod
    def delete_document(self, document_id: str, owner_id: str) -> None:
        """Raises DocumentNotFoundError if missing or not owned."""
