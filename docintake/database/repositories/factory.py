from docintake.config.settings import Settings
from docintake.database.repositories.base import BaseDocumentRepository
from docintake.database.repositories.documents_repository import DocumentsRepository
from docintake.database.repositories.memory_documents_repository import (
    InMemoryDocumentsRepository,
)


class DocumentRepositoryFactory:
    """Creates the configured lifecycle store."""

    ADAPTERS: dict[str, type[BaseDocumentRepository]] = {
        "postgres": DocumentsRepository,
        "memory": InMemoryDocumentsRepository,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentRepository:
        store = settings.document_store.lower()
        adapter_cls = cls.ADAPTERS.get(store)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown document store '{store}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
